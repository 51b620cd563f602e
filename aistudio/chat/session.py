"""Chat session identity: guest ids, customer ids and where they are kept"""

import json
import random
import re
import string
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from ..services.log_service import log_service

STORAGE_KEY = "kinetiq_session_id"
GUEST_PREFIX = "guest_"
GUEST_ID_PATTERN = re.compile(r"^guest_\d+_[0-9a-z]{9}$")

_BASE36 = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class GuestSession:
    """Unverified visitor, identified only by a locally generated id"""

    id: str
    kind = "guest"


@dataclass(frozen=True)
class IdentifiedSession:
    """Visitor whose identity the chat backend has verified"""

    id: str
    kind = "identified"


ChatSession = Union[GuestSession, IdentifiedSession]


def random_base36(length: int, rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    return "".join(rng.choice(_BASE36) for _ in range(length))


def generate_guest_id(
    now_ms: Optional[int] = None, rng: Optional[random.Random] = None
) -> str:
    """guest_<epoch millis>_<9 base36 chars>"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{GUEST_PREFIX}{now_ms}_{random_base36(9, rng)}"


def is_guest_id(value: str) -> bool:
    return value.startswith(GUEST_PREFIX)


def session_from_id(value: str) -> ChatSession:
    if is_guest_id(value):
        return GuestSession(value)
    return IdentifiedSession(value)


def transition(session: ChatSession, customer_id: Optional[str]) -> ChatSession:
    """
    Next session state given the customer id reported by the backend.

    An empty id, the current id or another guest id leaves the session
    as it is. Any other id is a server-issued customer id and identifies
    the visitor.
    """
    if not customer_id or customer_id == session.id or is_guest_id(customer_id):
        return session
    return IdentifiedSession(customer_id)


class SessionStore(Protocol):
    """Where the client keeps its session id between page loads"""

    def load(self) -> Optional[str]:
        ...

    def save(self, session_id: str) -> None:
        ...


class MemorySessionStore:
    """Session store held in process memory"""

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id
        self.saves = 0

    def load(self) -> Optional[str]:
        return self.session_id

    def save(self, session_id: str) -> None:
        self.session_id = session_id
        self.saves += 1


class FileSessionStore:
    """Key-value JSON file playing the role of browser local storage"""

    def __init__(self, path: Path, key: str = STORAGE_KEY):
        self.path = Path(path)
        self.key = key

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            log_service.error(f"Unreadable session file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> Optional[str]:
        value = self._read().get(self.key)
        return value if isinstance(value, str) and value else None

    def save(self, session_id: str) -> None:
        data = self._read()
        data[self.key] = session_id
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))


def load_or_create_session(
    store: SessionStore, rng: Optional[random.Random] = None
) -> ChatSession:
    """Restore the stored session, or start and persist a new guest one"""
    stored = store.load()
    if stored:
        return session_from_id(stored)

    session = GuestSession(generate_guest_id(rng=rng))
    store.save(session.id)
    log_service.chat(f"Started guest session {session.id}")
    return session
