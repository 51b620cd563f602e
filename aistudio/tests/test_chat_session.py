import random
import tempfile
import unittest
from pathlib import Path

from aistudio.chat.session import (
    GUEST_ID_PATTERN,
    STORAGE_KEY,
    FileSessionStore,
    GuestSession,
    IdentifiedSession,
    MemorySessionStore,
    generate_guest_id,
    load_or_create_session,
    session_from_id,
    transition,
)


class GuestIdTests(unittest.TestCase):
    def test_guest_id_shape(self):
        guest_id = generate_guest_id()
        self.assertRegex(guest_id, GUEST_ID_PATTERN)

    def test_guest_id_uses_timestamp_and_rng(self):
        first = generate_guest_id(now_ms=1700000000000, rng=random.Random(7))
        second = generate_guest_id(now_ms=1700000000000, rng=random.Random(7))

        self.assertTrue(first.startswith("guest_1700000000000_"))
        self.assertEqual(first, second)
        self.assertEqual(len(first.rsplit("_", 1)[1]), 9)


class TransitionTests(unittest.TestCase):
    def setUp(self):
        self.guest = GuestSession("guest_1_abcdefghi")

    def test_new_customer_id_identifies(self):
        self.assertEqual(
            transition(self.guest, "cust_42"), IdentifiedSession("cust_42")
        )

    def test_same_or_missing_id_keeps_session(self):
        self.assertIs(transition(self.guest, None), self.guest)
        self.assertIs(transition(self.guest, ""), self.guest)
        self.assertIs(transition(self.guest, self.guest.id), self.guest)

    def test_guest_ids_never_identify(self):
        self.assertIs(transition(self.guest, "guest_2_zzzzzzzzz"), self.guest)

    def test_identified_session_can_move_to_another_customer(self):
        identified = IdentifiedSession("cust_1")
        self.assertEqual(transition(identified, "cust_2"), IdentifiedSession("cust_2"))

    def test_session_from_id(self):
        self.assertIsInstance(session_from_id("guest_1_abcdefghi"), GuestSession)
        self.assertIsInstance(session_from_id("cust_9"), IdentifiedSession)


class SessionStoreTests(unittest.TestCase):
    def test_new_session_is_persisted_guest(self):
        store = MemorySessionStore()
        session = load_or_create_session(store)

        self.assertIsInstance(session, GuestSession)
        self.assertRegex(session.id, GUEST_ID_PATTERN)
        self.assertEqual(store.load(), session.id)

    def test_stored_session_is_restored(self):
        store = MemorySessionStore("cust_77")
        session = load_or_create_session(store)

        self.assertEqual(session, IdentifiedSession("cust_77"))
        self.assertEqual(store.saves, 0)

    def test_file_store_round_trip(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "storage.json"
            store = FileSessionStore(path)

            self.assertIsNone(store.load())
            store.save("cust_5")

            self.assertEqual(FileSessionStore(path).load(), "cust_5")
            self.assertIn(STORAGE_KEY, path.read_text())

    def test_file_store_ignores_corrupt_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "storage.json"
            path.write_text("{not json")

            self.assertIsNone(FileSessionStore(path).load())


if __name__ == "__main__":
    unittest.main()
