"""Pydantic schemas for validation"""

from .auth import Token, UserCreate, UserLogin, UserResponse
from .avatars import (
    AvatarCategory,
    AvatarCategoryList,
    AvatarCreate,
    AvatarDeleted,
    AvatarGenerate,
    AvatarList,
    AvatarResponse,
)
from .lighting import (
    LightingPresetCreate,
    LightingPresetDeleted,
    LightingPresetList,
    LightingPresetResponse,
    LightingPresetUpdate,
)
from .settings import (
    SettingAuthor,
    SettingDeleted,
    SettingResponse,
    SettingsResponse,
    SettingUpdate,
)

__all__ = [
    "Token",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "AvatarCreate",
    "AvatarGenerate",
    "AvatarResponse",
    "AvatarList",
    "AvatarCategory",
    "AvatarCategoryList",
    "AvatarDeleted",
    "LightingPresetCreate",
    "LightingPresetUpdate",
    "LightingPresetResponse",
    "LightingPresetList",
    "LightingPresetDeleted",
    "SettingUpdate",
    "SettingAuthor",
    "SettingResponse",
    "SettingsResponse",
    "SettingDeleted",
]
