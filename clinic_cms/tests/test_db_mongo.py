import unittest
from unittest import mock

import mongomock
from pymongo.errors import ServerSelectionTimeoutError

from clinic_cms.db import InMemoryDbClient, MongoDbClient


class MongoDbClientTests(unittest.TestCase):
    """
    Runs the pymongo client logic against mongomock so no server is needed.
    """

    def setUp(self):
        self.db = MongoDbClient(None, "clinic_test", client=mongomock.MongoClient())

    def test_insert_stamps_document(self):
        doc = self.db.insert("faqs", {"question": "q", "answer": "a", "isActive": True})
        self.assertIn("_id", doc)
        self.assertEqual(doc["createdAt"], doc["updatedAt"])
        fetched = self.db.get("faqs", str(doc["_id"]))
        self.assertEqual(fetched["question"], "q")

    def test_find_newest_first_with_filter(self):
        first = self.db.insert("partners", {"partnerName": "A", "isActive": True})
        self.db.insert("partners", {"partnerName": "B", "isActive": False})
        third = self.db.insert("partners", {"partnerName": "C", "isActive": True})

        active = self.db.find("partners", {"isActive": True})
        self.assertEqual([doc["_id"] for doc in active], [third["_id"], first["_id"]])
        oldest = self.db.find("partners", newest_first=False)
        self.assertEqual(oldest[0]["_id"], first["_id"])
        self.assertEqual(self.db.find_one("partners")["_id"], third["_id"])
        self.assertEqual(self.db.count("partners", {"isActive": True}), 2)

    def test_update_sets_fields(self):
        doc = self.db.insert("teams", {"name": "Ana", "designation": "Dentist"})
        updated = self.db.update("teams", str(doc["_id"]), {"designation": "Surgeon"})
        self.assertEqual(updated["designation"], "Surgeon")
        self.assertEqual(updated["name"], "Ana")

    def test_delete(self):
        doc = self.db.insert("results", {"title": "t"})
        self.assertTrue(self.db.delete("results", str(doc["_id"])))
        self.assertFalse(self.db.delete("results", str(doc["_id"])))

    def test_malformed_ids_behave_as_missing(self):
        self.assertIsNone(self.db.get("faqs", "nope"))
        self.assertIsNone(self.db.update("faqs", "nope", {"answer": "x"}))
        self.assertFalse(self.db.delete("faqs", "nope"))

    def test_failed_ping_reports_error(self):
        client = mock.MagicMock()
        client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
        db = MongoDbClient(None, client=client)
        self.assertEqual(db.connection_state(), "error: no servers")
        client.close.assert_called()

    def test_requires_uri_or_client(self):
        with self.assertRaises(ValueError):
            MongoDbClient(None)


class InMemoryDbClientTests(unittest.TestCase):
    def test_returns_copies(self):
        db = InMemoryDbClient()
        doc = db.insert("faqs", {"question": "q", "tags": ["a"]})
        doc["tags"].append("b")
        self.assertEqual(db.get("faqs", doc["_id"])["tags"], ["a"])

    def test_reset(self):
        db = InMemoryDbClient()
        db.insert("faqs", {"question": "q"})
        db.reset()
        self.assertEqual(db.count("faqs"), 0)


if __name__ == "__main__":
    unittest.main()
