"""Dashboard router module."""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..deps import get_dashboard, require_admin
from ...core.dashboard import DashboardAggregator
from ...core.selector import EventSelection

router = APIRouter(tags=["dashboard"], dependencies=[Depends(require_admin)])

@router.get("/dashboard")
async def get_dashboard_view(
    selection: Optional[str] = "current",
    dashboard: DashboardAggregator = Depends(get_dashboard),
):
    """
    Get the admin dashboard view.

    ?selection=current tracks the nearest upcoming event; an event id pins
    that event while it is still upcoming. If the stores cannot be read the
    response is a 503 carrying the last view that loaded.
    """
    result = await dashboard.compute_dashboard_view(EventSelection.parse(selection))
    return JSONResponse(status_code=200 if result.ok else 503, content=result.to_dict())
