import unittest

from clinic_cms.tests.support import ApiTestCase, mp4, png

HERO_TEXT = {"title": "Bright smiles", "description": "Gentle care", "textColor": "#FFFFFF"}


class HeroImageRouteTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()

    def create_hero(self, **text):
        return self.client.post(
            "/api/hero-images",
            data={**HERO_TEXT, **text},
            files={"image": png("desktop.png"), "mobileImage": png("mobile.png")},
            headers=self.headers,
        )

    def test_create_requires_token(self):
        response = self.client.post("/api/hero-images", data=HERO_TEXT)
        self.assertEqual(response.status_code, 401)

    def test_create_and_list(self):
        response = self.create_hero()
        self.assertEqual(response.status_code, 201)
        hero = response.json()["data"]
        self.assertTrue(hero["image"]["public_id"].startswith("hero-images/"))
        self.assertTrue(hero["mobileImage"]["url"])
        self.assertTrue(hero["isActive"])

        listed = self.client.get("/api/hero-images").json()
        self.assertEqual(listed["count"], 1)
        self.assertEqual(listed["data"][0]["_id"], hero["_id"])

    def test_invalid_text_is_rejected_before_upload(self):
        response = self.create_hero(textColor="white")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"][0]["field"], "textColor")
        self.assertEqual(self.media.stored_objects, {})

    def test_both_images_required(self):
        response = self.client.post(
            "/api/hero-images",
            data=HERO_TEXT,
            files={"image": png()},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.media.stored_objects, {})

    def test_non_image_upload_rejected(self):
        response = self.client.post(
            "/api/hero-images",
            data=HERO_TEXT,
            files={"image": ("notes.txt", b"hello", "text/plain"), "mobileImage": png()},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Only image files are allowed!")
        self.assertEqual(self.media.stored_objects, {})

    def test_update_replaces_only_sent_image(self):
        hero = self.create_hero().json()["data"]
        response = self.client.put(
            f"/api/hero-images/{hero['_id']}",
            data={"title": "New title", "isActive": "false"},
            files={"mobileImage": png("mobile2.png")},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        updated = response.json()["data"]
        self.assertEqual(updated["title"], "New title")
        self.assertFalse(updated["isActive"])
        self.assertEqual(updated["image"], hero["image"])
        self.assertNotEqual(updated["mobileImage"], hero["mobileImage"])
        self.assertEqual(self.media.destroyed, [hero["mobileImage"]["public_id"]])

        # Inactive banners drop off the public list.
        self.assertEqual(self.client.get("/api/hero-images").json()["count"], 0)

    def test_images_only_update(self):
        hero = self.create_hero().json()["data"]
        response = self.client.put(
            f"/api/hero-images/{hero['_id']}/images",
            files={"image": png("desktop2.png")},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        self.assertNotEqual(response.json()["data"]["image"], hero["image"])
        self.assertEqual(response.json()["data"]["title"], "Bright smiles")

    def test_delete_destroys_both_images(self):
        hero = self.create_hero().json()["data"]
        response = self.client.delete(f"/api/hero-images/{hero['_id']}", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            sorted(self.media.destroyed),
            sorted([hero["image"]["public_id"], hero["mobileImage"]["public_id"]]),
        )
        missing = self.client.get(f"/api/hero-images/{hero['_id']}")
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["message"], "Hero image not found")

    def test_malformed_id_is_not_found(self):
        response = self.client.get("/api/hero-images/not-an-object-id")
        self.assertEqual(response.status_code, 404)


class HeroVideoRouteTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()

    def create_video(self):
        return self.client.post(
            "/api/hero-videos",
            data=HERO_TEXT,
            files={"video": mp4()},
            headers=self.headers,
        )

    def test_missing_video_is_404(self):
        response = self.client.get("/api/hero-videos")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "No hero video found")

    def test_only_one_video_allowed(self):
        created = self.create_video()
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["message"], "Hero video created successfully")
        self.assertTrue(created.json()["data"]["video"]["public_id"].startswith("hero-videos/"))

        second = self.create_video()
        self.assertEqual(second.status_code, 400)
        self.assertIn("Hero video limit exceeded", second.json()["message"])
        self.assertEqual(len(self.media.stored_objects), 1)

    def test_update_requires_existing_video(self):
        response = self.client.put(
            "/api/hero-videos/update",
            data=HERO_TEXT,
            files={"video": mp4()},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)

    def test_update_swaps_video(self):
        original = self.create_video().json()["data"]
        response = self.client.put(
            "/api/hero-videos/update",
            data={**HERO_TEXT, "title": "Tour"},
            files={"video": mp4("tour.mp4")},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["title"], "Tour")
        self.assertEqual(self.media.destroyed, [original["video"]["public_id"]])
        self.assertEqual(self.client.get("/api/hero-videos").json()["data"]["title"], "Tour")

    def test_rejects_non_video(self):
        response = self.client.post(
            "/api/hero-videos",
            data=HERO_TEXT,
            files={"video": png()},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Only video files are allowed!")

    def test_delete(self):
        self.create_video()
        response = self.client.delete("/api/hero-videos", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.delete("/api/hero-videos", headers=self.headers).status_code, 404)


if __name__ == "__main__":
    unittest.main()
