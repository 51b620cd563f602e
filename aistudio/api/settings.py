"""Settings API routes"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models.user import User
from ..schemas.settings import (
    SettingAuthor,
    SettingDeleted,
    SettingResponse,
    SettingsResponse,
    SettingUpdate,
)
from ..services.log_service import log_service
from ..services.settings_cache import SettingsCache
from ..services.settings_defaults import InvalidSettingValue
from ..services.settings_manager import SettingsManager
from .auth import require_admin
from .dependencies import get_settings_cache, require_database
from .errors import ApiError

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/", response_model=SettingsResponse)
async def get_all_settings(cache: SettingsCache = Depends(get_settings_cache)):
    """Get all settings, stored overrides merged over defaults"""
    return SettingsResponse(settings=await cache.snapshot())


@router.get("/{key}", response_model=SettingResponse)
async def get_setting(
    key: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    cache: SettingsCache = Depends(get_settings_cache),
):
    """Get specific setting"""
    if not key.strip():
        raise ApiError.invalid_input("Setting key is required")

    value = await cache.get(key)
    if not getattr(request.app.state, "db_available", True):
        return SettingResponse(key=key, value=value)

    try:
        row = await SettingsManager(db, cache).get_row(key)
    except SQLAlchemyError as e:
        log_service.error(f"Error fetching setting '{key}': {e}")
        raise ApiError.internal()

    if row is None:
        return SettingResponse(key=key, value=value)

    return SettingResponse(
        key=key,
        value=value,
        updated_by=SettingAuthor.model_validate(row.user) if row.user else None,
        updated_at=row.updated_at,
    )


@router.put(
    "/{key}",
    response_model=SettingResponse,
    dependencies=[Depends(require_database)],
)
async def update_setting(
    key: str,
    data: SettingUpdate,
    db: AsyncSession = Depends(get_db),
    cache: SettingsCache = Depends(get_settings_cache),
    current_user: User = Depends(require_admin),
):
    """Create or replace a setting override"""
    settings = SettingsManager(db, cache)

    try:
        setting = await settings.set(key, data.value, user_id=current_user.id)
    except InvalidSettingValue as e:
        raise ApiError.invalid_value(str(e))
    except SQLAlchemyError as e:
        log_service.error(f"Error updating setting '{key}': {e}")
        raise ApiError.internal("Failed to update setting")

    return SettingResponse(
        key=setting.key, value=setting.value, updated_at=setting.updated_at
    )


@router.delete(
    "/{key}",
    response_model=SettingDeleted,
    dependencies=[Depends(require_database)],
)
async def delete_setting(
    key: str,
    db: AsyncSession = Depends(get_db),
    cache: SettingsCache = Depends(get_settings_cache),
    current_user: User = Depends(require_admin),
):
    """Delete a setting override, reverting to the default"""
    settings = SettingsManager(db, cache)

    try:
        deleted = await settings.delete(key)
    except SQLAlchemyError as e:
        log_service.error(f"Error deleting setting '{key}': {e}")
        raise ApiError.internal("Failed to delete setting")

    if not deleted:
        raise ApiError.not_found(f"No stored override for '{key}'")

    return SettingDeleted(key=key, message="Setting deleted, will use default")
