"""Request bodies for the events API."""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict

class EventCreate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    title: str
    event_date: str
    description: Optional[str] = None
    event_time: Optional[str] = None
    location: Optional[str] = None
    meeting_point: Optional[str] = None
    banner_url: Optional[str] = None
    is_active: bool = True

class EventUpdate(BaseModel):
    """Every field optional; only the fields sent are changed."""

    # id and created_at are accepted so the dashboard can send a whole record back
    model_config = ConfigDict(extra='forbid')

    id: Optional[str] = None
    created_at: Optional[str] = None
    title: Optional[str] = None
    event_date: Optional[str] = None
    description: Optional[str] = None
    event_time: Optional[str] = None
    location: Optional[str] = None
    meeting_point: Optional[str] = None
    banner_url: Optional[str] = None
    is_active: Optional[bool] = None

class RegistrationCreate(BaseModel):
    """Any extra form answers are kept and stored under details."""

    model_config = ConfigDict(extra='allow')

    event_id: Union[str, Dict[str, Any]]
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    details: Dict[str, Any] = {}
