"""Admin auth routes."""

from fastapi import APIRouter, Depends

from ..deps import require_admin

router = APIRouter(prefix="/auth", tags=["auth"])

@router.get("/check", dependencies=[Depends(require_admin)])
async def check_auth():
    """Lets the dashboard confirm its stored admin key is still valid."""
    return {"authenticated": True}
