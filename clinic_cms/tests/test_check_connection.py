import os
import runpy
import unittest
from pathlib import Path
from unittest import mock

from clinic_cms.config import Settings

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "check_connection.py"


class CheckConnectionScriptTests(unittest.TestCase):
    def setUp(self):
        self.script = runpy.run_path(str(SCRIPT), run_name="check_connection")

    def test_describe_hosts_lists_every_seed(self):
        hosts = self.script["describe_hosts"](
            "mongodb://clinic:pw@db1.internal:27017,db2.internal:27018/site"
        )
        self.assertEqual(hosts, "db1.internal:27017, db2.internal:27018")

    def test_describe_hosts_default_port(self):
        self.assertEqual(
            self.script["describe_hosts"]("mongodb://localhost/site"), "localhost:27017"
        )

    def test_missing_settings(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None, jwt_secret="s", mongodb_uri=None)
        missing = self.script["missing_settings"](settings)
        self.assertIn("MONGODB_URI", missing)
        self.assertIn("CLOUDINARY_API_KEY", missing)
        self.assertNotIn("JWT_SECRET", missing)


if __name__ == "__main__":
    unittest.main()
