"""Avatar service"""

import re
import time
from typing import List, Optional
from urllib.parse import quote

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.avatar import Avatar
from ..schemas.avatars import AvatarCreate, AvatarGenerate

AVATAR_SCOPE = "avatar"
CATEGORY_GROUPS = ("gender", "style")
GENERATED_IMAGE_URL = "https://picsum.photos/seed/{seed}/600/800"


def slugify(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.strip().lower()).strip("-")


def category_id(group: str, name: str, scope: str = AVATAR_SCOPE) -> str:
    """Stable id for a category derived from avatar attributes"""
    return f"{slugify(scope)}-{slugify(group)}-{slugify(name)}"


class AvatarService:
    """Avatar library"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_avatars(self) -> List[Avatar]:
        """All active avatars, newest first"""
        result = await self.db.execute(
            select(Avatar)
            .where(Avatar.status == "active")
            .order_by(Avatar.id.desc())
        )
        return list(result.scalars().all())

    async def get_avatar(self, avatar_id: int) -> Optional[Avatar]:
        return await self.db.get(Avatar, avatar_id)

    async def _save(self, avatar: Avatar) -> Avatar:
        self.db.add(avatar)
        await self.db.commit()
        await self.db.refresh(avatar)
        return avatar

    async def create_avatar(
        self, data: AvatarCreate, user_id: Optional[int] = None
    ) -> Avatar:
        return await self._save(Avatar(**data.model_dump(), created_by=user_id))

    async def generate_avatar(
        self, data: AvatarGenerate, user_id: Optional[int] = None
    ) -> Avatar:
        """
        Create an AI avatar. Image generation is stubbed with a
        placeholder image seeded from the prompt.
        """
        name = data.name or "AI Avatar"
        seed = f"{data.prompt or data.style or name}{int(time.time() * 1000)}"
        avatar = Avatar(
            name=name,
            gender=data.gender,
            style=data.style,
            color=data.color,
            source_type="ai",
            prompt=data.prompt,
            image_url=GENERATED_IMAGE_URL.format(seed=quote(seed, safe="")),
            created_by=user_id,
        )
        return await self._save(avatar)

    async def delete_avatar(self, avatar: Avatar):
        await self.db.delete(avatar)
        await self.db.commit()

    async def category_names(self, group: str) -> List[str]:
        """Distinct values of one attribute across avatars, sorted"""
        column = getattr(Avatar, group)
        result = await self.db.execute(
            select(column).where(column.isnot(None)).distinct().order_by(column)
        )
        return [name for name in result.scalars().all() if name.strip()]
