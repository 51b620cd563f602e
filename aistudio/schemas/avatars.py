"""Avatar schemas"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class AvatarCreate(BaseModel):
    """Register an uploaded or preset avatar"""

    name: str = Field(..., min_length=1, max_length=255)
    source_type: str = Field(..., min_length=1, max_length=20)
    gender: Optional[str] = Field(None, max_length=50)
    style: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=50)
    image_url: Optional[str] = None


class AvatarGenerate(BaseModel):
    """Ask for an AI-generated avatar"""

    prompt: Optional[str] = None
    name: Optional[str] = Field(None, max_length=255)
    gender: Optional[str] = Field(None, max_length=50)
    style: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=50)


class AvatarResponse(BaseModel):
    id: int
    name: str
    gender: Optional[str] = None
    style: Optional[str] = None
    color: Optional[str] = None
    source_type: str
    image_url: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AvatarList(BaseModel):
    items: List[AvatarResponse]


class AvatarCategory(BaseModel):
    id: str
    name: str
    category_group: str
    scope: str


class AvatarCategoryList(BaseModel):
    items: List[AvatarCategory]


class AvatarDeleted(BaseModel):
    ok: bool = True
    message: str
