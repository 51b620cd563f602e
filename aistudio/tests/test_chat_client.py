import json
import unittest

import httpx

from aistudio.chat.client import ChatClient, MalformedReplyError, VerificationError


class ChatClientTests(unittest.IsolatedAsyncioTestCase):
    async def asyncTearDown(self):
        await self.client.close()

    def make_client(self, handler):
        self.requests = []

        def record(request):
            self.requests.append(request)
            return handler(request)

        self.client = ChatClient(
            api_url="http://chat.test/",
            channel="web",
            transport=httpx.MockTransport(record),
        )
        return self.client

    async def test_send_message(self):
        client = self.make_client(
            lambda request: httpx.Response(
                200, json={"response": "Hello!", "customerId": "cust_1"}
            )
        )

        reply = await client.send_message("hi there", "guest_1_abcdefghi")

        request = self.requests[0]
        self.assertEqual(str(request.url), "http://chat.test/api/chat/message")
        self.assertEqual(request.headers["X-Customer-Id"], "guest_1_abcdefghi")
        self.assertEqual(
            json.loads(request.content), {"message": "hi there", "channel": "web"}
        )
        self.assertEqual(reply.text, "Hello!")
        self.assertEqual(reply.customer_id, "cust_1")

    async def test_greeting_payload(self):
        client = self.make_client(
            lambda request: httpx.Response(200, json={"response": "Welcome back"})
        )

        reply = await client.greet("guest_1_abcdefghi")

        self.assertTrue(json.loads(self.requests[0].content)["greeting"])
        self.assertIsNone(reply.customer_id)

    async def test_numeric_customer_id_becomes_string(self):
        client = self.make_client(
            lambda request: httpx.Response(
                200, json={"response": "hi", "customerId": 42}
            )
        )

        reply = await client.send_message("hi", "guest_1_abcdefghi")

        self.assertEqual(reply.customer_id, "42")

    async def test_empty_customer_id_is_none(self):
        client = self.make_client(
            lambda request: httpx.Response(
                200, json={"response": "hi", "customerId": ""}
            )
        )

        reply = await client.send_message("hi", "guest_1_abcdefghi")

        self.assertIsNone(reply.customer_id)

    async def test_non_object_body_raises(self):
        for body in (b'["unexpected"]', b'"text"', b"null"):
            client = self.make_client(
                lambda request, body=body: httpx.Response(
                    200, content=body, headers={"Content-Type": "application/json"}
                )
            )
            with self.assertRaises(MalformedReplyError):
                await client.send_message("hi", "guest_1_abcdefghi")
            await client.close()

    async def test_server_error_raises(self):
        client = self.make_client(lambda request: httpx.Response(500))

        with self.assertRaises(httpx.HTTPStatusError):
            await client.send_message("hi", "guest_1_abcdefghi")

    async def test_verify_identity(self):
        client = self.make_client(
            lambda request: httpx.Response(200, json={"userId": "cust_9"})
        )

        customer_id = await client.verify_identity("a@b.c", "1990-06-14", "4567")

        self.assertEqual(customer_id, "cust_9")
        self.assertEqual(
            json.loads(self.requests[0].content),
            {"email": "a@b.c", "dob": "1990-06-14", "last4": "4567"},
        )

    async def test_verify_identity_numeric_id(self):
        client = self.make_client(
            lambda request: httpx.Response(200, json={"userId": 77})
        )

        customer_id = await client.verify_identity("a@b.c", "1990-06-14", "4567")

        self.assertEqual(customer_id, "77")

    async def test_verify_identity_non_object_body(self):
        client = self.make_client(lambda request: httpx.Response(200, json=[1]))

        with self.assertRaises(VerificationError):
            await client.verify_identity("a@b.c", "1990-06-14", "4567")

    async def test_verify_identity_rejected(self):
        client = self.make_client(lambda request: httpx.Response(401))

        with self.assertRaises(VerificationError):
            await client.verify_identity("a@b.c", "1990-06-14", "0000")


if __name__ == "__main__":
    unittest.main()
