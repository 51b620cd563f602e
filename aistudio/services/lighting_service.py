"""Lighting preset service"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.lighting_preset import LightingPreset
from ..schemas.lighting import LightingPresetCreate, LightingPresetUpdate


class LightingService:
    """Studio lighting presets"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_presets(
        self, search: Optional[str] = None, limit: int = 50
    ) -> List[LightingPreset]:
        """List presets, newest first, optionally filtered by name"""
        query = select(LightingPreset)
        if search:
            query = query.where(LightingPreset.name.ilike(f"%{search}%"))
        query = query.order_by(LightingPreset.id.desc()).limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_preset(self, preset_id: int) -> Optional[LightingPreset]:
        return await self.db.get(LightingPreset, preset_id)

    async def create_preset(
        self, data: LightingPresetCreate, user_id: Optional[int] = None
    ) -> LightingPreset:
        """Save a new preset"""
        preset = LightingPreset(**data.model_dump(), created_by=user_id)
        self.db.add(preset)
        await self.db.commit()
        await self.db.refresh(preset)
        return preset

    async def update_preset(
        self, preset: LightingPreset, data: LightingPresetUpdate
    ) -> LightingPreset:
        """Apply the fields present in data"""
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(preset, field, value)
        await self.db.commit()
        await self.db.refresh(preset)
        return preset

    async def delete_preset(self, preset: LightingPreset):
        await self.db.delete(preset)
        await self.db.commit()
