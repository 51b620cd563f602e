import asyncio
import unittest
from unittest.mock import Mock

import httpx

from aistudio.chat.client import ChatClient, ChatReply, VerificationError
from aistudio.chat.session import GUEST_ID_PATTERN, IdentifiedSession, MemorySessionStore
from aistudio.chat.widget import FALLBACK_REPLY, ChatApp, ChatWidget, FloatingChatWidget


class FakeChatClient:
    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []
        self.error = None
        self.gate = None
        self.verified_id = None

    async def _answer(self, kind, text, session_id):
        self.calls.append((kind, text, session_id))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else ChatReply(text="ok")

    async def greet(self, session_id):
        return await self._answer("greet", "", session_id)

    async def send_message(self, text, session_id):
        return await self._answer("message", text, session_id)

    async def verify_identity(self, email, dob, last4):
        if self.verified_id is None:
            raise VerificationError("rejected")
        return self.verified_id


class ChatWidgetTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.client = FakeChatClient()
        self.store = MemorySessionStore()
        self.on_update = Mock()
        self.widget = ChatWidget(
            self.client, self.store, on_session_update=self.on_update
        )

    async def test_mount_creates_guest_session_and_greets_once(self):
        self.client.replies = [ChatReply(text="Hi! How can I help?")]

        await self.widget.mount()
        await self.widget.mount()

        self.assertRegex(self.widget.session_id, GUEST_ID_PATTERN)
        self.assertEqual(self.store.load(), self.widget.session_id)
        self.assertEqual(
            self.client.calls, [("greet", "", self.widget.session_id)]
        )
        self.assertEqual(len(self.widget.messages), 1)
        self.assertEqual(self.widget.messages[0].role, "assistant")
        self.assertIsNone(await self.widget.greet())

    async def test_mount_uses_stored_session(self):
        self.store.save("cust_3")

        await self.widget.mount()

        self.assertEqual(self.widget.session, IdentifiedSession("cust_3"))
        self.assertEqual(self.client.calls[0][2], "cust_3")

    async def test_greeting_with_customer_id_identifies_session(self):
        self.client.replies = [ChatReply(text="Welcome back", customer_id="cust_42")]

        await self.widget.mount()

        self.assertEqual(self.widget.session_id, "cust_42")
        self.assertEqual(self.store.load(), "cust_42")
        self.on_update.assert_called_once_with("cust_42")

    async def test_repeated_customer_id_notifies_once(self):
        self.client.replies = [
            ChatReply(text="Welcome back", customer_id="cust_42"),
            ChatReply(text="Sure", customer_id="cust_42"),
        ]

        await self.widget.mount()
        await self.widget.send("what is my balance?")

        self.on_update.assert_called_once_with("cust_42")
        self.assertEqual(self.client.calls[1], ("message", "what is my balance?", "cust_42"))

    async def test_send_appends_user_and_assistant_messages(self):
        await self.widget.mount()
        self.client.replies = [ChatReply(text="Your balance is $10")]

        reply = await self.widget.send("  balance please ")

        self.assertEqual(reply.text, "Your balance is $10")
        self.assertEqual(
            [(m.role, m.text) for m in self.widget.messages[1:]],
            [("user", "balance please"), ("assistant", "Your balance is $10")],
        )
        self.assertFalse(self.widget.busy)

    async def test_blank_message_is_ignored(self):
        await self.widget.mount()

        self.assertIsNone(await self.widget.send("   "))
        self.assertEqual(len(self.client.calls), 1)

    async def test_send_while_busy_is_noop(self):
        await self.widget.mount()
        count = len(self.widget.messages)
        self.client.gate = asyncio.Event()

        first = asyncio.create_task(self.widget.send("first"))
        while not self.widget.busy:
            await asyncio.sleep(0)

        self.assertIsNone(await self.widget.send("second"))
        self.assertEqual(len(self.widget.messages), count + 1)

        self.client.gate.set()
        await first

        self.assertEqual(len(self.widget.messages), count + 2)
        self.assertEqual(
            [call[1] for call in self.client.calls if call[0] == "message"], ["first"]
        )

    async def test_failure_becomes_fallback_message(self):
        await self.widget.mount()
        session_id = self.widget.session_id
        self.client.error = httpx.ConnectError("connection refused")

        reply = await self.widget.send("hello?")

        self.assertEqual(reply.text, FALLBACK_REPLY)
        self.assertEqual(reply.role, "assistant")
        self.assertEqual(self.widget.session_id, session_id)
        self.assertEqual(len(self.widget.messages), 3)
        self.assertFalse(self.widget.busy)
        self.on_update.assert_not_called()

    async def test_greeting_failure_becomes_fallback_message(self):
        self.client.error = httpx.ReadTimeout("timed out")

        await self.widget.mount()

        self.assertEqual(self.widget.messages[0].text, FALLBACK_REPLY)
        self.assertTrue(self.widget.has_greeted)

    async def test_verify_adopts_customer_id(self):
        await self.widget.mount()
        self.client.verified_id = "cust_8"

        self.assertTrue(await self.widget.verify("a@b.c", "1990-06-14", "4567"))
        self.assertEqual(self.widget.session_id, "cust_8")
        self.on_update.assert_called_once_with("cust_8")

    async def test_verify_rejected(self):
        await self.widget.mount()
        session_id = self.widget.session_id

        self.assertFalse(await self.widget.verify("a@b.c", "1990-06-14", "0000"))
        self.assertEqual(self.widget.session_id, session_id)


class ChatWidgetTransportTests(unittest.IsolatedAsyncioTestCase):
    async def test_network_error_through_real_client(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = ChatClient(
            api_url="http://chat.test", transport=httpx.MockTransport(refuse)
        )
        widget = ChatWidget(client, MemorySessionStore())
        try:
            await widget.mount()
        finally:
            await client.close()

        self.assertEqual(widget.messages[0].text, FALLBACK_REPLY)

    async def test_customer_id_from_backend(self):
        def answer(request):
            return httpx.Response(
                200, json={"response": "Verified, thanks!", "customerId": "cust_11"}
            )

        client = ChatClient(
            api_url="http://chat.test", transport=httpx.MockTransport(answer)
        )
        store = MemorySessionStore()
        widget = ChatWidget(client, store)
        try:
            await widget.mount()
        finally:
            await client.close()

        self.assertEqual(store.load(), "cust_11")

    async def mount_against(self, handler, store):
        client = ChatClient(
            api_url="http://chat.test", transport=httpx.MockTransport(handler)
        )
        on_update = Mock()
        widget = ChatWidget(client, store, on_session_update=on_update)
        try:
            await widget.mount()
        finally:
            await client.close()
        return widget, on_update

    async def test_numeric_customer_id_identifies_session(self):
        store = MemorySessionStore()
        widget, on_update = await self.mount_against(
            lambda request: httpx.Response(
                200, json={"response": "hi", "customerId": 42}
            ),
            store,
        )

        self.assertEqual(widget.messages[0].text, "hi")
        self.assertEqual(widget.session, IdentifiedSession("42"))
        self.assertEqual(store.load(), "42")
        on_update.assert_called_once_with("42")

    async def test_non_object_reply_becomes_fallback_message(self):
        store = MemorySessionStore()
        widget, on_update = await self.mount_against(
            lambda request: httpx.Response(200, json=["unexpected"]), store
        )

        self.assertEqual([m.text for m in widget.messages], [FALLBACK_REPLY])
        self.assertRegex(widget.session_id, GUEST_ID_PATTERN)
        self.assertFalse(widget.busy)
        on_update.assert_not_called()

    async def test_non_json_reply_becomes_fallback_message(self):
        widget, _ = await self.mount_against(
            lambda request: httpx.Response(200, text="<html>oops</html>"),
            MemorySessionStore(),
        )

        self.assertEqual(widget.messages[0].text, FALLBACK_REPLY)


class ChatAppTests(unittest.IsolatedAsyncioTestCase):
    async def test_full_page_app_tracks_identified_session(self):
        client = FakeChatClient([ChatReply(text="Hi", customer_id="cust_5")])
        store = MemorySessionStore()
        app = ChatApp(client, store)
        guest_id = app.session_id

        widget = await app.start()

        self.assertRegex(guest_id, GUEST_ID_PATTERN)
        self.assertIs(widget, app.view)
        self.assertEqual(app.session_id, "cust_5")
        self.assertEqual(store.load(), "cust_5")

    async def test_promotion_is_saved_once(self):
        client = FakeChatClient([ChatReply(text="Hi", customer_id="cust_5")])
        store = MemorySessionStore()
        app = ChatApp(client, store)
        saves = store.saves

        await app.start()

        self.assertEqual(store.saves, saves + 1)
        self.assertEqual(app.session_id, "cust_5")

    async def test_app_ignores_guest_updates(self):
        app = ChatApp(FakeChatClient(), MemorySessionStore("guest_1_abcdefghi"))

        app.handle_session_update("guest_2_bbbbbbbbb")
        app.handle_session_update("")

        self.assertEqual(app.session_id, "guest_1_abcdefghi")

    async def test_embedded_app_greets_on_open(self):
        client = FakeChatClient()
        app = ChatApp(client, MemorySessionStore(), embedded=True)

        self.assertIsInstance(app.view, FloatingChatWidget)
        self.assertFalse(app.view.is_open)
        self.assertEqual(client.calls, [])

        widget = await app.start()
        app.view.close()
        reopened = await app.view.open()

        self.assertIs(widget, reopened)
        self.assertTrue(app.view.is_open)
        self.assertEqual(len(client.calls), 1)


if __name__ == "__main__":
    unittest.main()
