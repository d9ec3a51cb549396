import unittest

from clinic_cms.tests.support import ApiTestCase, mp4, png
from clinic_cms.uploads import MAX_IMAGE_BYTES, is_allowed_image, is_allowed_video


class FileRuleTests(unittest.TestCase):
    def test_image_rules(self):
        self.assertTrue(is_allowed_image("smile.JPG", "image/jpeg"))
        self.assertTrue(is_allowed_image("logo.svg", "image/svg+xml"))
        self.assertFalse(is_allowed_image("smile.png", "application/octet-stream"))
        self.assertFalse(is_allowed_image("doc.pdf", "image/png"))

    def test_video_rules(self):
        self.assertTrue(is_allowed_video("tour.webm", "video/webm"))
        self.assertFalse(is_allowed_video("tour.mp4", "application/mp4"))
        self.assertFalse(is_allowed_video("tour.gif", "video/gif"))


class UploadRouteTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()

    def test_endpoint_listing(self):
        response = self.client.get("/api/upload/test")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["endpoints"]["singleImage"], "POST /api/upload/image")

    def test_single_image(self):
        response = self.client.post(
            "/api/upload/image", files={"image": png()}, headers=self.headers
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertTrue(data["public_id"].startswith("images/"))
        self.assertEqual(data["bytes"], len(png()[1]))
        self.assertNotIn("duration", data)

    def test_upload_requires_token(self):
        response = self.client.post("/api/upload/image", files={"image": png()})
        self.assertEqual(response.status_code, 401)

    def test_oversized_image(self):
        big = ("big.png", b"\x00" * (MAX_IMAGE_BYTES + 1), "image/png")
        response = self.client.post(
            "/api/upload/image", files={"image": big}, headers=self.headers
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "File too large. Maximum size is 10MB.")

    def test_batch_images(self):
        files = [("images", png(f"p{index}.png")) for index in range(3)]
        response = self.client.post("/api/upload/images", files=files, headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "3 images uploaded successfully")
        self.assertEqual(len(response.json()["data"]), 3)

    def test_batch_limit(self):
        files = [("images", png(f"p{index}.png")) for index in range(6)]
        response = self.client.post("/api/upload/images", files=files, headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.media.stored_objects, {})

    def test_batch_with_one_bad_file_uploads_nothing(self):
        files = [("images", png()), ("images", ("notes.txt", b"hi", "text/plain"))]
        response = self.client.post("/api/upload/images", files=files, headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.media.stored_objects, {})

    def test_videos(self):
        single = self.client.post(
            "/api/upload/video", files={"video": mp4()}, headers=self.headers
        )
        self.assertEqual(single.status_code, 200)
        self.assertIn("duration", single.json()["data"])
        self.assertTrue(single.json()["data"]["public_id"].startswith("videos/"))

        files = [("videos", mp4(f"v{index}.mp4")) for index in range(4)]
        batch = self.client.post("/api/upload/videos", files=files, headers=self.headers)
        self.assertEqual(batch.status_code, 400)
        self.assertEqual(batch.json()["message"], "Too many files. Maximum is 3 files.")

    def test_media_host_failure(self):
        self.media.fail_uploads = True
        response = self.client.post(
            "/api/upload/image", files={"image": png()}, headers=self.headers
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["message"], "Failed to upload image")

    def test_missing_file(self):
        response = self.client.post("/api/upload/video", headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "No video file provided")


if __name__ == "__main__":
    unittest.main()
