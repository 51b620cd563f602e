"""Lighting preset API routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models.lighting_preset import LightingPreset
from ..models.user import User
from ..schemas.lighting import (
    LightingPresetCreate,
    LightingPresetDeleted,
    LightingPresetList,
    LightingPresetResponse,
    LightingPresetUpdate,
)
from ..services.lighting_service import LightingService
from ..services.log_service import log_service
from .auth import get_current_user
from .dependencies import feature_gate, require_database
from .errors import ApiError

router = APIRouter(
    prefix="/api/lighting",
    tags=["lighting"],
    dependencies=[
        Depends(feature_gate("lighting", "Lighting feature is currently disabled")),
        Depends(require_database),
    ],
)


async def _owned_preset(
    service: LightingService, preset_id: int, user: User, action: str
) -> LightingPreset:
    preset = await service.get_preset(preset_id)
    if preset is None:
        raise ApiError.not_found("Lighting preset not found")
    # Presets without an owner are shared
    if preset.created_by is not None and preset.created_by != user.id:
        raise ApiError.forbidden(f"You don't have permission to {action} this preset")
    return preset


@router.get("/presets", response_model=LightingPresetList)
async def list_lighting_presets(
    search: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
):
    """List lighting presets"""
    try:
        presets = await LightingService(db).list_presets(
            search=search.strip() if search else None, limit=limit
        )
    except SQLAlchemyError as e:
        log_service.error(f"Error listing lighting presets: {e}")
        raise ApiError.internal("Failed to fetch lighting presets")

    return LightingPresetList(
        items=[LightingPresetResponse.model_validate(p) for p in presets]
    )


@router.post("/presets", response_model=LightingPresetResponse, status_code=201)
async def create_lighting_preset(
    data: LightingPresetCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a new lighting preset"""
    try:
        return await LightingService(db).create_preset(data, user_id=current_user.id)
    except SQLAlchemyError as e:
        log_service.error(f"Error creating lighting preset: {e}")
        raise ApiError.internal("Failed to create lighting preset")


@router.put("/presets/{preset_id}", response_model=LightingPresetResponse)
async def update_lighting_preset(
    preset_id: int,
    data: LightingPresetUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update a lighting preset owned by the caller"""
    service = LightingService(db)
    preset = await _owned_preset(service, preset_id, current_user, "update")

    try:
        return await service.update_preset(preset, data)
    except SQLAlchemyError as e:
        log_service.error(f"Error updating lighting preset {preset_id}: {e}")
        raise ApiError.internal("Failed to update lighting preset")


@router.delete("/presets/{preset_id}", response_model=LightingPresetDeleted)
async def delete_lighting_preset(
    preset_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a lighting preset owned by the caller"""
    service = LightingService(db)
    preset = await _owned_preset(service, preset_id, current_user, "delete")

    try:
        await service.delete_preset(preset)
    except SQLAlchemyError as e:
        log_service.error(f"Error deleting lighting preset {preset_id}: {e}")
        raise ApiError.internal("Failed to delete lighting preset")

    log_service.info(f"Lighting preset {preset_id} deleted by user {current_user.id}")
    return LightingPresetDeleted(message="Lighting preset deleted successfully")
