"""Shared request dependencies"""

from fastapi import Depends, Request

from ..services.settings_cache import SettingsCache
from .errors import ApiError


def get_settings_cache(request: Request) -> SettingsCache:
    """The application's settings cache"""
    return request.app.state.settings_cache


def database_available(request: Request) -> bool:
    """Result of the startup database check"""
    return getattr(request.app.state, "db_available", True)


def require_database(request: Request):
    """Fail with database_unavailable when the startup check failed"""
    if not database_available(request):
        raise ApiError.database_unavailable()


def feature_gate(feature: str, message: str = None):
    """Dependency factory rejecting requests while a feature flag is off"""

    async def check_feature(cache: SettingsCache = Depends(get_settings_cache)):
        if not await cache.is_feature_enabled(feature):
            raise ApiError.feature_disabled(
                message or f"{feature} feature is currently disabled"
            )

    return check_feature
