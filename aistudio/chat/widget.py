"""Headless chat widget: message list, greeting and session promotion"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, List, Optional

import httpx

from ..services.log_service import log_service
from .client import ChatClient, ChatReply, VerificationError
from .session import (
    ChatSession,
    SessionStore,
    is_guest_id,
    load_or_create_session,
    session_from_id,
    transition,
)

FALLBACK_REPLY = "Sorry, I encountered an error. Please try again."

SessionUpdateCallback = Callable[[str], None]


@dataclass
class Message:
    text: str
    role: str  # 'user' or 'assistant'
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)


class ChatWidget:
    """
    One conversation with the chat backend.

    The widget greets once when mounted with an empty history, sends
    visitor messages one at a time and promotes its session to the
    customer id the backend reports. Transport failures become a fixed
    apology message; they never propagate to the caller.
    """

    def __init__(
        self,
        client: ChatClient,
        store: SessionStore,
        session_id: Optional[str] = None,
        on_session_update: Optional[SessionUpdateCallback] = None,
    ):
        self.client = client
        self.store = store
        self.on_session_update = on_session_update
        self.session: Optional[ChatSession] = (
            session_from_id(session_id) if session_id else None
        )
        self.messages: List[Message] = []
        self.busy = False
        self.has_greeted = False

    @property
    def session_id(self) -> Optional[str]:
        return self.session.id if self.session else None

    async def mount(self):
        """Restore or create the session, then greet if nothing was said yet"""
        if self.session is None:
            self.session = load_or_create_session(self.store)
        if not self.messages and not self.has_greeted:
            await self.greet()

    async def greet(self) -> Optional[Message]:
        """Send the one greeting request of this widget's lifetime"""
        if self.has_greeted or self.busy:
            return None
        self.has_greeted = True
        return await self._exchange(self.client.greet(self.session_id))

    async def send(self, text: str) -> Optional[Message]:
        """Send a visitor message; a no-op while blank or busy"""
        text = (text or "").strip()
        if not text or self.busy:
            return None

        self._append(text, "user")
        return await self._exchange(self.client.send_message(text, self.session_id))

    async def verify(self, email: str, dob: str, last4: str) -> bool:
        """Verify identity directly and adopt the issued customer id"""
        try:
            customer_id = await self.client.verify_identity(email, dob, last4)
        except VerificationError as e:
            log_service.chat(f"Verification rejected for {self.session_id}: {e}")
            return False
        except (httpx.HTTPError, ValueError) as e:
            log_service.error(f"Verification request failed: {e}")
            return False

        self._apply_customer_id(customer_id)
        return not is_guest_id(self.session_id)

    async def _exchange(self, request: Awaitable[ChatReply]) -> Message:
        self.busy = True
        try:
            reply = await request
        except (httpx.HTTPError, ValueError) as e:
            log_service.error(f"Error sending message for {self.session_id}: {e}")
            return self._append(FALLBACK_REPLY, "assistant")
        finally:
            self.busy = False

        message = self._append(reply.text, "assistant")
        self._apply_customer_id(reply.customer_id)
        return message

    def _append(self, text: str, role: str) -> Message:
        message = Message(text=text, role=role)
        self.messages.append(message)
        return message

    def _apply_customer_id(self, customer_id: Optional[str]):
        updated = transition(self.session, customer_id)
        if updated == self.session:
            return

        log_service.chat(f"Session {self.session.id} identified as {updated.id}")
        self.session = updated
        self.store.save(updated.id)
        if self.on_session_update:
            self.on_session_update(updated.id)


class FloatingChatWidget:
    """Chat bubble that mounts the conversation when first opened"""

    def __init__(
        self,
        client: ChatClient,
        store: SessionStore,
        session_id: str,
        on_session_update: Optional[SessionUpdateCallback] = None,
    ):
        self.client = client
        self.store = store
        self.session_id = session_id
        self.on_session_update = on_session_update
        self.is_open = False
        self.widget: Optional[ChatWidget] = None

    async def open(self) -> ChatWidget:
        self.is_open = True
        if self.widget is None:
            self.widget = ChatWidget(
                self.client,
                self.store,
                session_id=self.session_id,
                on_session_update=self.on_session_update,
            )
            await self.widget.mount()
        return self.widget

    def close(self):
        self.is_open = False


class ChatApp:
    """Page-level owner of the session id, full-page or embedded"""

    def __init__(self, client: ChatClient, store: SessionStore, embedded: bool = False):
        self.client = client
        self.store = store
        self.embedded = embedded
        self.session_id = load_or_create_session(store).id

        if embedded:
            self.view = FloatingChatWidget(
                client, store, self.session_id, self.handle_session_update
            )
        else:
            self.view = ChatWidget(
                client,
                store,
                session_id=self.session_id,
                on_session_update=self.handle_session_update,
            )

    async def start(self) -> ChatWidget:
        """Bring up the conversation the page shows"""
        if self.embedded:
            return await self.view.open()
        await self.view.mount()
        return self.view

    def handle_session_update(self, customer_id: str):
        # The widget has already persisted the id
        if customer_id and not is_guest_id(customer_id):
            self.session_id = customer_id
