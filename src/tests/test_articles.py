"""Ownership and visibility tests for article endpoints."""

from __future__ import annotations

import uuid
from unittest import mock

from django.utils import timezone

from articles.models import Article
from authentication.models import User
from tests.utils import FakeRedisTestCase, article_payload, auth_client, create_article, create_user


class ArticleAccessTests(FakeRedisTestCase):
    """Author-only writes, admin moderation, and draft/deleted visibility."""

    @classmethod
    def setUpTestData(cls):
        """Seed an author, a second user, an admin, and baseline articles."""
        cls.author = create_user("author@test.com", name="Ada Author")
        cls.other = create_user("other@test.com", name="Otto Other")
        cls.admin = create_user("admin@test.com", role=User.Role.ADMIN, name="Admin")

        cls.published = create_article(cls.author, title="Published Piece", published=True)
        cls.draft = create_article(cls.author, title="Draft Piece")
        cls.deleted = create_article(cls.author, title="Deleted Piece", published=True)
        cls.deleted.deleted_at = timezone.now()
        cls.deleted.save(update_fields=["deleted_at"])

    @staticmethod
    def _ids(response):
        return {item["id"] for item in response.json()["data"]}

    def test_public_list_excludes_drafts_and_deleted(self):
        response = self.api_client.get("/api/articles/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self._ids(response), {str(self.published.id)})
        item = response.json()["data"][0]
        self.assertEqual(item["author"], {"id": str(self.author.id), "name": "Ada Author"})
        self.assertNotIn("content", item)

    def test_retrieve_by_slug(self):
        response = self.api_client.get(f"/api/articles/{self.published.slug}/")
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["data"]["id"], str(self.published.id))
        self.assertIn("content", body["data"])

    def test_retrieve_draft_or_deleted_slug_404(self):
        for article in (self.draft, self.deleted):
            response = self.api_client.get(f"/api/articles/{article.slug}/")
            self.assertEqual(response.status_code, 404)
            self.assertEqual(response.json()["code"], "not_found")

    def test_create_requires_authentication(self):
        response = self.api_client.post("/api/articles/", article_payload(), format="json")

        self.assertEqual(response.status_code, 401)
        self.assertIsNone(response.json()["data"])

    def test_create_defaults_to_draft_owned_by_caller(self):
        response = auth_client(self.other).post(
            "/api/articles/", article_payload(title="Hello World!"), format="json"
        )
        body = response.json()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(body["message"], "Article created successfully")
        self.assertEqual(body["data"]["slug"], "hello-world")
        self.assertFalse(body["data"]["published"])
        self.assertEqual(body["data"]["author"]["id"], str(self.other.id))

    def test_create_ignores_client_supplied_author(self):
        payload = article_payload(title="Someone Else's Name", author=str(self.author.id))
        response = auth_client(self.other).post("/api/articles/", payload, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["data"]["author"]["id"], str(self.other.id))

    def test_create_validation_envelope(self):
        payload = article_payload(title="Hey", image_url="not a url", description="too short")
        response = auth_client(self.author).post("/api/articles/", payload, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 400)
        self.assertEqual(body["code"], "validation_error")
        self.assertEqual({e["field"] for e in body["errors"]}, {"title", "image_url", "description"})
        for error in body["errors"]:
            self.assertTrue(error["message"])

    def test_same_title_gets_distinct_slugs(self):
        client = auth_client(self.other)
        first = client.post("/api/articles/", article_payload(title="Same Title"), format="json").json()
        second = client.post("/api/articles/", article_payload(title="Same Title"), format="json").json()

        self.assertEqual(first["data"]["slug"], "same-title")
        self.assertNotEqual(first["data"]["slug"], second["data"]["slug"])
        self.assertTrue(second["data"]["slug"].startswith("same-title-"))

    def test_slug_collision_at_write_returns_409(self):
        """If two writers race to the same slug, the constraint answers with a conflict."""
        with mock.patch("articles.services.unique_slug", return_value=self.published.slug):
            response = auth_client(self.other).post("/api/articles/", article_payload(), format="json")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "slug_conflict")

    def test_non_author_cannot_update_or_delete(self):
        client = auth_client(self.other)
        url = f"/api/articles/{self.published.id}/"

        update = client.patch(url, {"category": "Hacked"}, format="json")
        delete = client.delete(url)

        self.assertEqual(update.status_code, 403)
        self.assertEqual(update.json()["code"], "forbidden")
        self.assertEqual(update.json()["message"], "You don't have permission to modify this resource.")
        self.assertEqual(delete.status_code, 403)
        self.published.refresh_from_db()
        self.assertIsNone(self.published.deleted_at)

    def test_admin_cannot_update_others_article(self):
        response = auth_client(self.admin).patch(
            f"/api/articles/{self.published.id}/", {"category": "Moderated"}, format="json"
        )
        self.assertEqual(response.status_code, 403)

    def test_admin_can_delete_others_article(self):
        response = auth_client(self.admin).delete(f"/api/articles/{self.published.id}/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Article deleted successfully")
        self.published.refresh_from_db()
        self.assertIsNotNone(self.published.deleted_at)
        self.assertEqual(self.api_client.get(f"/api/articles/{self.published.slug}/").status_code, 404)

    def test_author_can_delete_own_article(self):
        response = auth_client(self.author).delete(f"/api/articles/{self.draft.id}/")

        self.assertEqual(response.status_code, 200)
        self.assertTrue(Article.objects.filter(pk=self.draft.pk, deleted_at__isnull=False).exists())

    def test_missing_article_is_404_not_403(self):
        """Resolution happens before the ownership check."""
        client = auth_client(self.other)
        for url in (f"/api/articles/{uuid.uuid4()}/", f"/api/articles/{self.deleted.id}/", "/api/articles/garbage/"):
            self.assertEqual(client.patch(url, {"category": "Anything"}, format="json").status_code, 404)

    def test_update_regenerates_slug_only_on_title_change(self):
        client = auth_client(self.author)
        url = f"/api/articles/{self.draft.id}/"

        same_title = client.patch(url, {"title": "Draft Piece", "category": "Essays"}, format="json")
        self.assertEqual(same_title.status_code, 200)
        self.assertEqual(same_title.json()["data"]["slug"], self.draft.slug)
        self.assertEqual(same_title.json()["data"]["category"], "Essays")

        renamed = client.put(url, {"title": "A Brand New Title"}, format="json")
        self.assertEqual(renamed.status_code, 200)
        self.assertEqual(renamed.json()["data"]["slug"], "a-brand-new-title")
        self.assertEqual(renamed.json()["message"], "Article updated successfully")

    def test_update_rejects_slug(self):
        response = auth_client(self.author).patch(
            f"/api/articles/{self.draft.id}/", {"slug": "custom-slug"}, format="json"
        )
        body = response.json()

        self.assertEqual(response.status_code, 400)
        self.assertEqual(body["errors"][0]["field"], "slug")
        self.draft.refresh_from_db()
        self.assertEqual(self.draft.slug, "draft-piece")

    def test_update_does_not_reset_published_when_omitted(self):
        response = auth_client(self.author).patch(
            f"/api/articles/{self.published.id}/", {"category": "Updates"}, format="json"
        )
        self.assertTrue(response.json()["data"]["published"])

    def test_toggle_publish_twice_restores_state(self):
        client = auth_client(self.author)
        url = f"/api/articles/{self.draft.id}/publish/"

        first = client.patch(url)
        self.assertEqual(first.status_code, 200)
        self.assertTrue(first.json()["data"]["published"])
        self.assertEqual(first.json()["message"], "Article published successfully")

        second = client.patch(url)
        self.assertFalse(second.json()["data"]["published"])
        self.assertEqual(second.json()["message"], "Article unpublished successfully")

    def test_admin_cannot_toggle_publish_of_others(self):
        response = auth_client(self.admin).patch(f"/api/articles/{self.draft.id}/publish/")
        self.assertEqual(response.status_code, 403)

    def test_search_requires_query(self):
        response = self.api_client.get("/api/articles/search/")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "bad_request")

    def test_search_matches_author_name_and_skips_drafts(self):
        response = self.api_client.get("/api/articles/search/", {"q": "ADA"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self._ids(response), {str(self.published.id)})

    def test_search_matches_content(self):
        response = self.api_client.get("/api/articles/search/", {"q": "lazy"})
        self.assertEqual(self._ids(response), {str(self.published.id)})

    def test_category_is_case_insensitive(self):
        response = self.api_client.get("/api/articles/category/programming/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self._ids(response), {str(self.published.id)})
        self.assertEqual(self._ids(self.api_client.get("/api/articles/category/Cooking/")), set())

    def test_admin_list_includes_drafts_not_deleted(self):
        response = auth_client(self.admin).get("/api/articles/admin/all/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self._ids(response), {str(self.published.id), str(self.draft.id)})

    def test_admin_routes_reject_non_admins(self):
        self.assertEqual(self.api_client.get("/api/articles/admin/all/").status_code, 401)

        response = auth_client(self.author).get("/api/articles/admin/all/")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Access denied. Admin role required.")

    def test_admin_detail_shows_drafts_but_not_deleted(self):
        client = auth_client(self.admin)

        draft = client.get(f"/api/articles/admin/{self.draft.id}/")
        self.assertEqual(draft.status_code, 200)
        self.assertEqual(draft.json()["data"]["content"], self.draft.content)

        self.assertEqual(client.get(f"/api/articles/admin/{self.deleted.id}/").status_code, 404)

    def test_title_matching_a_list_route_stays_readable(self):
        """A title like "Search" must not produce a slug that a list route captures."""
        article = create_article(self.other, title="Search", published=True)

        self.assertRegex(article.slug, r"^search-\d{13}$")
        response = self.api_client.get(f"/api/articles/{article.slug}/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["id"], str(article.id))
