"""Settings schemas"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel


class SettingUpdate(BaseModel):
    """Update a single setting"""

    value: Any


class SettingAuthor(BaseModel):
    """User who last changed a setting"""

    id: int
    name: Optional[str] = None
    email: str

    class Config:
        from_attributes = True


class SettingResponse(BaseModel):
    """Single setting"""

    key: str
    value: Any = None
    updated_by: Optional[SettingAuthor] = None
    updated_at: Optional[datetime] = None


class SettingsResponse(BaseModel):
    """Settings response"""

    settings: Dict[str, Any]


class SettingDeleted(BaseModel):
    """Setting reverted to its default"""

    key: str
    message: str
