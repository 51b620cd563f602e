"""Services layer"""

from .auth_service import AuthService
from .avatar_service import AvatarService
from .lighting_service import LightingService
from .log_service import LogService
from .settings_cache import SettingsCache
from .settings_manager import SettingsManager

__all__ = [
    "SettingsCache",
    "SettingsManager",
    "LogService",
    "AuthService",
    "LightingService",
    "AvatarService",
]
