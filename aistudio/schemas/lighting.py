"""Lighting preset schemas"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class LightingPresetCreate(BaseModel):
    """Create a lighting preset"""

    name: str = Field(..., min_length=1, max_length=255)
    intensity: int = Field(60, ge=0, le=100)
    temperature: int = Field(5200, ge=1000, le=12000)
    softness: int = Field(60, ge=0, le=100)
    shadow: int = Field(40, ge=0, le=100)
    direction: str = "front"
    image_url: Optional[str] = None


class LightingPresetUpdate(BaseModel):
    """Partial update; omitted fields keep their value"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    intensity: Optional[int] = Field(None, ge=0, le=100)
    temperature: Optional[int] = Field(None, ge=1000, le=12000)
    softness: Optional[int] = Field(None, ge=0, le=100)
    shadow: Optional[int] = Field(None, ge=0, le=100)
    direction: Optional[str] = None
    image_url: Optional[str] = None


class LightingPresetResponse(LightingPresetCreate):
    """Lighting preset response"""

    id: int
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LightingPresetList(BaseModel):
    """List of lighting presets"""

    items: List[LightingPresetResponse]


class LightingPresetDeleted(BaseModel):
    ok: bool = True
    message: str
