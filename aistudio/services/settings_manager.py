"""Settings management service"""

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.setting import AdminSetting
from .log_service import log_service
from .settings_cache import SettingsCache
from .settings_defaults import coerce_setting_value


class SettingsManager:
    """Read and write stored setting overrides"""

    def __init__(self, db: AsyncSession, cache: SettingsCache):
        self.db = db
        self.cache = cache

    async def get_row(self, key: str) -> Optional[AdminSetting]:
        """Get the stored override for key, if any"""
        result = await self.db.execute(
            select(AdminSetting).where(AdminSetting.key == key)
        )
        return result.scalar_one_or_none()

    async def set(
        self, key: str, value: Any, user_id: Optional[int] = None
    ) -> AdminSetting:
        """Upsert a setting and invalidate the cache"""
        value = coerce_setting_value(key, value)

        setting = await self.get_row(key)
        if setting:
            setting.value = value
            setting.updated_by = user_id
        else:
            setting = AdminSetting(key=key, value=value, updated_by=user_id)
            self.db.add(setting)

        await self.db.commit()
        await self.db.refresh(setting)

        self.cache.invalidate()
        log_service.info(f"Setting '{key}' updated by user {user_id}")
        return setting

    async def delete(self, key: str) -> bool:
        """Remove an override so the default applies again"""
        setting = await self.get_row(key)
        if setting is None:
            return False

        await self.db.delete(setting)
        await self.db.commit()

        self.cache.invalidate()
        log_service.info(f"Setting '{key}' reverted to default")
        return True
