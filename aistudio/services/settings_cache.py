"""Time-based cache over the admin settings table"""

import copy
import time
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional

from sqlalchemy import select

from ..config import settings as app_settings
from ..database import AsyncSessionLocal
from ..models.setting import AdminSetting
from .log_service import log_service
from .settings_defaults import DEFAULT_SETTINGS

SettingsLoader = Callable[[], Awaitable[Dict[str, Any]]]


async def load_settings_table(session_factory=None) -> Dict[str, Any]:
    """Read every stored setting as a key -> value mapping"""
    async with (session_factory or AsyncSessionLocal)() as db:
        result = await db.execute(select(AdminSetting))
        return {row.key: row.value for row in result.scalars().all()}


class SettingsCache:
    """
    Process-wide snapshot of the settings table merged over the defaults.

    The snapshot is refreshed as a whole once it is older than ``ttl``
    seconds or after ``invalidate()``. A failed reload answers from the
    defaults and leaves the cache empty, so the next read tries again.
    """

    def __init__(
        self,
        loader: Optional[SettingsLoader] = None,
        ttl: Optional[float] = None,
        defaults: Optional[Dict[str, Any]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.loader = loader or load_settings_table
        self.ttl = app_settings.SETTINGS_CACHE_TTL_SECONDS if ttl is None else ttl
        self.defaults = DEFAULT_SETTINGS if defaults is None else defaults
        self.clock = clock
        self._snapshot: Optional[Dict[str, Any]] = None
        self._refreshed_at = 0.0
        self._generation = 0

    def _is_fresh(self) -> bool:
        return (
            self._snapshot is not None
            and self.clock() - self._refreshed_at < self.ttl
        )

    def _resolve(self, source: Dict[str, Any], key: str) -> Any:
        # Copies, so callers can't mutate the snapshot or the defaults
        if key in source:
            return copy.deepcopy(source[key])
        return copy.deepcopy(self.defaults.get(key))

    async def _reload(self) -> Optional[Dict[str, Any]]:
        """Rebuild the snapshot, or return None if the store is unreachable"""
        generation = self._generation
        try:
            table = await self.loader()
        except Exception as e:
            log_service.error(f"Error fetching settings: {e}")
            return None

        snapshot = dict(table)
        # Presence, not truthiness: a stored False/0/"" must win
        for key, value in self.defaults.items():
            if key not in snapshot:
                snapshot[key] = value

        # An invalidate() during the load means the table may predate a write
        if generation == self._generation:
            self._snapshot = snapshot
            self._refreshed_at = self.clock()
        return snapshot

    async def get(self, key: str) -> Any:
        """Get a setting value, falling back to its default"""
        if self._is_fresh():
            return self._resolve(self._snapshot, key)

        snapshot = await self._reload()
        if snapshot is None:
            return self._resolve({}, key)
        return self._resolve(snapshot, key)

    async def get_many(self, keys: Iterable[str]) -> Dict[str, Any]:
        """Get several settings at once"""
        return {key: await self.get(key) for key in keys}

    async def snapshot(self) -> Dict[str, Any]:
        """Full merged mapping of stored settings over defaults"""
        if self._is_fresh():
            return copy.deepcopy(self._snapshot)

        snapshot = await self._reload()
        return copy.deepcopy(self.defaults if snapshot is None else snapshot)

    async def is_feature_enabled(self, feature: str) -> bool:
        """True only if features.<feature>.enabled is exactly True"""
        return await self.get(f"features.{feature}.enabled") is True

    def invalidate(self):
        """Drop the snapshot so the next read reloads"""
        self._generation += 1
        self._snapshot = None
        self._refreshed_at = 0.0
