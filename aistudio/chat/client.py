"""HTTP client for the customer-support chat backend"""

from dataclasses import dataclass
from typing import Dict, Optional

import httpx

from ..config import settings
from ..services.log_service import log_service

IDENTITY_HEADER = "X-Customer-Id"


@dataclass
class ChatReply:
    """Assistant answer plus the identity the backend now associates"""

    text: str
    customer_id: Optional[str] = None


class VerificationError(Exception):
    """The backend rejected the identity details"""


class MalformedReplyError(ValueError):
    """The chat backend answered with a body that is not a JSON object"""


class ChatClient:
    """Chat message and identity verification endpoints"""

    def __init__(
        self,
        api_url: Optional[str] = None,
        channel: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = (api_url or settings.CHAT_API_URL).rstrip("/")
        self.channel = channel or settings.CHAT_CHANNEL
        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=timeout or settings.CHAT_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def _post_message(self, session_id: str, payload: Dict) -> ChatReply:
        try:
            response = await self.client.post(
                "/api/chat/message",
                json=payload,
                headers={IDENTITY_HEADER: session_id},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            log_service.error(f"Chat API error: {e}")
            raise

        data = response.json()
        if not isinstance(data, dict):
            raise MalformedReplyError(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        # Backends may issue numeric customer ids
        customer_id = data.get("customerId")
        return ChatReply(
            text=str(data.get("response") or ""),
            customer_id=str(customer_id) if customer_id not in (None, "") else None,
        )

    async def send_message(self, text: str, session_id: str) -> ChatReply:
        """Send a visitor message"""
        return await self._post_message(
            session_id, {"message": text, "channel": self.channel}
        )

    async def greet(self, session_id: str) -> ChatReply:
        """Ask the backend to resume the conversation or open with a greeting"""
        return await self._post_message(
            session_id, {"message": "", "channel": self.channel, "greeting": True}
        )

    async def verify_identity(self, email: str, dob: str, last4: str) -> str:
        """Verify a visitor and return the customer id the backend issues"""
        response = await self.client.post(
            "/api/auth/verify",
            json={"email": email, "dob": dob, "last4": last4},
        )
        if not response.is_success:
            raise VerificationError(
                f"Verification failed with status {response.status_code}"
            )

        data = response.json()
        user_id = data.get("userId") if isinstance(data, dict) else None
        if not user_id:
            raise VerificationError("Verification response carried no user id")
        return str(user_id)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
