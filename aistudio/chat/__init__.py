"""Customer-support chat widget controller"""

from .client import ChatClient, ChatReply, MalformedReplyError, VerificationError
from .session import (
    FileSessionStore,
    GuestSession,
    IdentifiedSession,
    MemorySessionStore,
    generate_guest_id,
    load_or_create_session,
    transition,
)
from .widget import FALLBACK_REPLY, ChatApp, ChatWidget, FloatingChatWidget, Message

__all__ = [
    "ChatClient",
    "ChatReply",
    "VerificationError",
    "MalformedReplyError",
    "GuestSession",
    "IdentifiedSession",
    "MemorySessionStore",
    "FileSessionStore",
    "generate_guest_id",
    "load_or_create_session",
    "transition",
    "ChatWidget",
    "FloatingChatWidget",
    "ChatApp",
    "Message",
    "FALLBACK_REPLY",
]
