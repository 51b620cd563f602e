"""Database models"""

from .avatar import Avatar
from .lighting_preset import LightingPreset
from .setting import AdminSetting
from .user import User

__all__ = ["User", "AdminSetting", "LightingPreset", "Avatar"]
