import json
import unittest

from clinic_cms.errors import APIError
from clinic_cms.routes.articles import merge_article, parse_youtube_links
from clinic_cms.tests.support import ApiTestCase, png

ARTICLE_FORM = {
    "cardTitle": "Implants",
    "cardDescription": "Permanent replacement teeth",
    "blogTitle": "All about implants",
    "blogDescription": "What to expect",
    "paras": json.dumps([{"heading": "Procedure", "content": "Two visits."}]),
    "pointParas": json.dumps([{"heading": "Benefits", "sentences": ["Stable", "Natural"]}]),
    "youtubeLinks": "https://youtu.be/abc123, https://www.youtube.com/watch?v=xyz_9",
}


class YoutubeLinkTests(unittest.TestCase):
    def test_comma_separated_and_json_forms(self):
        self.assertEqual(
            parse_youtube_links(" https://youtu.be/a1 ,, youtu.be/b2 "),
            ["https://youtu.be/a1", "youtu.be/b2"],
        )
        self.assertEqual(parse_youtube_links('["https://youtu.be/a1"]'), ["https://youtu.be/a1"])
        self.assertEqual(parse_youtube_links(None), [])

    def test_rejects_other_hosts(self):
        with self.assertRaises(APIError) as ctx:
            parse_youtube_links("https://vimeo.com/123")
        self.assertEqual(ctx.exception.message, "Invalid YouTube URL format")

    def test_rejects_broken_json(self):
        with self.assertRaises(APIError) as ctx:
            parse_youtube_links('["https://youtu.be/a1"')
        self.assertEqual(
            ctx.exception.message,
            "Invalid JSON format for paras, pointParas, or youtubeLinks",
        )


class MergeArticleTests(unittest.TestCase):
    def test_merge_keeps_images_and_unsent_fields(self):
        existing = {
            "cardInfo": {"title": "Old", "description": "Card", "image": {"public_id": "c"}},
            "serviceBlog": {"title": "Body", "heroImage": {"public_id": "h"}, "paras": []},
            "isActive": True,
        }
        merged = merge_article(
            existing,
            {"cardInfo": {"title": "New"}, "serviceBlog": {"paras": [{"heading": "a", "content": "b"}]}},
            "serviceBlog",
        )
        self.assertEqual(merged["cardInfo"]["title"], "New")
        self.assertEqual(merged["cardInfo"]["image"], {"public_id": "c"})
        self.assertEqual(merged["serviceBlog"]["heroImage"], {"public_id": "h"})
        self.assertEqual(merged["serviceBlog"]["title"], "Body")
        self.assertNotIn("isActive", merged)


class ServiceRouteTests(ApiTestCase):
    prefix = "/api/services"
    body_key = "serviceBlog"
    folder = "services"

    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()

    def create(self, form=None, files=None):
        return self.client.post(
            self.prefix,
            data=form or ARTICLE_FORM,
            files=files if files is not None else {"cardImage": png("card.png"), "heroImage": png("hero.png")},
            headers=self.headers,
        )

    def test_create(self):
        response = self.create()
        self.assertEqual(response.status_code, 201)
        data = response.json()["data"]
        self.assertEqual(data["cardInfo"]["title"], "Implants")
        self.assertTrue(data["cardInfo"]["image"]["public_id"].startswith(f"{self.folder}/"))
        body = data[self.body_key]
        self.assertTrue(body["heroImage"]["url"])
        self.assertEqual(body["paras"], [{"heading": "Procedure", "content": "Two visits."}])
        self.assertEqual(body["pointParas"][0]["sentences"], ["Stable", "Natural"])
        self.assertEqual(len(body["youtubeLinks"]), 2)

    def test_missing_text_fields(self):
        form = {key: value for key, value in ARTICLE_FORM.items() if key != "blogTitle"}
        response = self.create(form=form)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Missing required fields")
        self.assertEqual(self.media.stored_objects, {})

    def test_bad_json_rejected_before_upload(self):
        response = self.create(form={**ARTICLE_FORM, "paras": "[{"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["message"],
            "Invalid JSON format for paras, pointParas, or youtubeLinks",
        )
        self.assertEqual(self.media.stored_objects, {})

    def test_bad_youtube_link_rejected_before_upload(self):
        response = self.create(form={**ARTICLE_FORM, "youtubeLinks": "https://vimeo.com/1"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Invalid YouTube URL format")
        self.assertEqual(self.media.stored_objects, {})

    def test_both_images_required(self):
        response = self.create(files={"cardImage": png()})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Both cardImage and heroImage are required")

    def test_json_update_merges_nested_sections(self):
        created = self.create().json()["data"]
        response = self.client.put(
            f"{self.prefix}/{created['_id']}",
            json={
                "cardInfo": {"description": "Updated card"},
                self.body_key: {"youtubeLinks": ["https://youtu.be/new1"]},
            },
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["cardInfo"]["title"], "Implants")
        self.assertEqual(data["cardInfo"]["description"], "Updated card")
        self.assertEqual(data["cardInfo"]["image"], created["cardInfo"]["image"])
        self.assertEqual(data[self.body_key]["youtubeLinks"], ["https://youtu.be/new1"])
        self.assertEqual(data[self.body_key]["paras"], created[self.body_key]["paras"])

    def test_update_rejects_bad_youtube_link(self):
        created = self.create().json()["data"]
        response = self.client.put(
            f"{self.prefix}/{created['_id']}",
            json={self.body_key: {"youtubeLinks": ["ftp://example.com"]}},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)

    def test_delete_destroys_both_images(self):
        created = self.create().json()["data"]
        response = self.client.delete(f"{self.prefix}/{created['_id']}", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(self.media.destroyed), 2)
        self.assertEqual(self.client.get(self.prefix).json()["count"], 0)


class BlogRouteTests(ServiceRouteTests):
    prefix = "/api/blogs"
    body_key = "blogContent"
    folder = "blogs"

    def test_not_found_message(self):
        response = self.client.get(f"{self.prefix}/64b7f0c2a1b2c3d4e5f60718")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Blog not found")


if __name__ == "__main__":
    unittest.main()
