"""Avatar API routes"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models.user import User
from ..schemas.avatars import (
    AvatarCategory,
    AvatarCategoryList,
    AvatarCreate,
    AvatarDeleted,
    AvatarGenerate,
    AvatarList,
    AvatarResponse,
)
from ..services.avatar_service import (
    AVATAR_SCOPE,
    CATEGORY_GROUPS,
    AvatarService,
    category_id,
)
from ..services.log_service import log_service
from ..services.settings_cache import SettingsCache
from .auth import get_current_user, get_optional_user
from .dependencies import (
    database_available,
    feature_gate,
    get_settings_cache,
    require_database,
)
from .errors import ApiError

router = APIRouter(prefix="/api/avatars", tags=["avatars"])

avatars_enabled = feature_gate("avatars", "Avatars feature is currently disabled")
ai_generation_enabled = feature_gate(
    "avatars.ai_generation", "AI avatar generation is currently disabled"
)


def _default_categories(names: List[str], group: str) -> List[AvatarCategory]:
    return [
        AvatarCategory(
            id=f"default-{name.lower()}",
            name=name,
            category_group=group,
            scope=AVATAR_SCOPE,
        )
        for name in names
    ]


@router.get(
    "/",
    response_model=AvatarList,
    dependencies=[Depends(avatars_enabled), Depends(require_database)],
)
async def list_avatars(db: AsyncSession = Depends(get_db)):
    """List avatars, newest first"""
    try:
        avatars = await AvatarService(db).list_avatars()
    except SQLAlchemyError as e:
        log_service.error(f"Error listing avatars: {e}")
        raise ApiError.internal("Failed to fetch avatars")

    return AvatarList(items=[AvatarResponse.model_validate(a) for a in avatars])


@router.get("/categories", response_model=AvatarCategoryList)
async def list_avatar_categories(
    request: Request,
    group: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    cache: SettingsCache = Depends(get_settings_cache),
):
    """
    Categories seen on avatars, per group.

    When a group has no avatars yet, the configured default options for
    that group are offered instead; they are also served while the
    database is down.
    """
    group = group.strip().lower() if group else None
    if group and group not in CATEGORY_GROUPS:
        raise ApiError.invalid_input(f"Unknown category group: {group}")

    defaults: List[AvatarCategory] = []
    if group:
        options = await cache.get(f"avatars.default_{group}_options")
        if isinstance(options, list):
            defaults = _default_categories([str(o) for o in options], group)

    if not database_available(request):
        if defaults:
            return AvatarCategoryList(items=defaults)
        raise ApiError.database_unavailable()

    service = AvatarService(db)
    items = []
    try:
        for name_group in [group] if group else CATEGORY_GROUPS:
            for name in await service.category_names(name_group):
                items.append(
                    AvatarCategory(
                        id=category_id(name_group, name),
                        name=name,
                        category_group=name_group,
                        scope=AVATAR_SCOPE,
                    )
                )
    except SQLAlchemyError as e:
        log_service.error(f"Error listing avatar categories: {e}")
        raise ApiError.internal("Failed to fetch categories")

    return AvatarCategoryList(items=items or defaults)


@router.post(
    "/",
    response_model=AvatarResponse,
    status_code=201,
    dependencies=[Depends(avatars_enabled), Depends(require_database)],
)
async def create_avatar(
    data: AvatarCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """Register an uploaded or preset avatar"""
    try:
        return await AvatarService(db).create_avatar(
            data, user_id=current_user.id if current_user else None
        )
    except SQLAlchemyError as e:
        log_service.error(f"Error creating avatar: {e}")
        raise ApiError.internal("Failed to create avatar")


@router.post(
    "/generate",
    response_model=AvatarResponse,
    status_code=201,
    dependencies=[
        Depends(avatars_enabled),
        Depends(ai_generation_enabled),
        Depends(require_database),
    ],
)
async def generate_avatar(
    data: AvatarGenerate,
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """Generate an avatar with AI"""
    try:
        return await AvatarService(db).generate_avatar(
            data, user_id=current_user.id if current_user else None
        )
    except SQLAlchemyError as e:
        log_service.error(f"Error generating avatar: {e}")
        raise ApiError.internal("Failed to generate avatar")


@router.delete(
    "/{avatar_id}",
    response_model=AvatarDeleted,
    dependencies=[Depends(require_database)],
)
async def delete_avatar(
    avatar_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete an avatar owned by the caller"""
    service = AvatarService(db)
    avatar = await service.get_avatar(avatar_id)
    if avatar is None:
        raise ApiError.not_found("Avatar not found")
    if avatar.created_by is not None and avatar.created_by != current_user.id:
        raise ApiError.forbidden("You don't have permission to delete this avatar")

    try:
        await service.delete_avatar(avatar)
    except SQLAlchemyError as e:
        log_service.error(f"Error deleting avatar {avatar_id}: {e}")
        raise ApiError.internal("Failed to delete avatar")

    log_service.info(f"Avatar {avatar_id} deleted by user {current_user.id}")
    return AvatarDeleted(message="Avatar deleted successfully")
