"""
Shared fixtures for API tests: an app wired to in-memory backends.
"""

import unittest

from fastapi.testclient import TestClient

from clinic_cms.app import create_app
from clinic_cms.auth import create_access_token, create_user
from clinic_cms.config import Settings, get_settings
from clinic_cms.db import InMemoryDbClient
from clinic_cms.dependencies import get_db_client, get_feature_store, get_media_client
from clinic_cms.features import FeatureStore
from clinic_cms.media import InMemoryMediaClient

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
MP4_BYTES = b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 64


def png(name="photo.png"):
    return (name, PNG_BYTES, "image/png")


def mp4(name="clip.mp4"):
    return (name, MP4_BYTES, "video/mp4")


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.media = InMemoryMediaClient()
        self.features = FeatureStore()
        self.settings = Settings(
            _env_file=None, jwt_secret="test-secret", environment="test"
        )

        self.app = create_app()
        self.app.dependency_overrides[get_db_client] = lambda: self.db
        self.app.dependency_overrides[get_media_client] = lambda: self.media
        self.app.dependency_overrides[get_feature_store] = lambda: self.features
        self.app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(self.app)

    def make_admin(self, email="admin@clinic.com", username="admin"):
        return create_user(self.db, username=username, email=email, password="secret123")

    def auth_headers(self, user=None):
        user = user or self.make_admin()
        token = create_access_token(str(user["_id"]), self.settings)
        return {"Authorization": f"Bearer {token}"}
