# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from datetime import date, timedelta
from pathlib import Path

from fastapi.testclient import TestClient

ADMIN_EMAIL = "root@example.com"


class TestCommunityAndAdmin(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="vitapulse-test-"))
        data_root = cls._tmp / "data"
        os.environ["VITAPULSE_DATA_ROOT"] = str(data_root)
        os.environ["VITAPULSE_DB_PATH"] = str(data_root / "vitapulse.db")
        os.environ["VITAPULSE_JWT_SECRET"] = "test-secret"
        os.environ["VITAPULSE_ADMIN_EMAILS"] = ADMIN_EMAIL

        for name in list(sys.modules.keys()):
            if name.startswith("vitapulse."):
                sys.modules.pop(name, None)

        from vitapulse.api import app  # noqa: WPS433 (import inside test for env control)

        cls.client = TestClient(app)
        cls.admin = cls._register(ADMIN_EMAIL, "Site Admin")
        cls.alice = cls._register("alice@example.com", "Alice Author")
        cls.bob = cls._register("bob@example.com", "Bob Reader")

    @classmethod
    def tearDownClass(cls) -> None:
        os.environ.pop("VITAPULSE_ADMIN_EMAILS", None)
        cls.client.close()
        shutil.rmtree(cls._tmp, ignore_errors=True)

    @classmethod
    def _register(cls, email: str, name: str) -> dict:
        resp = cls.client.post("/api/auth/register", json={"email": email, "password": "password123", "full_name": name})
        assert resp.status_code == 200, resp.text
        cls.client.cookies.clear()
        body = resp.json()
        return {"id": body["user"]["id"], "role": body["user"]["role"], "headers": {"Authorization": f"Bearer {body['token']}"}}

    def _post(self, author: dict, **overrides) -> dict:
        payload = {"title": "Protein on a budget", "content": "Any tips?", "category": "Nutrition", "tags": ["Protein", " budget "]}
        payload.update(overrides)
        resp = self.client.post("/api/community/posts", json=payload, headers=author["headers"])
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["post"]

    def test_admin_is_provisioned_from_env(self) -> None:
        self.assertEqual(self.admin["role"], "admin")
        self.assertEqual(self.alice["role"], "user")

    def test_create_and_list_posts(self) -> None:
        post = self._post(self.alice, title="Best breakfast for runners")
        self.assertEqual(post["tags"], ["protein", "budget"])
        self.assertEqual(post["author"]["name"], "Alice Author")

        resp = self.client.get("/api/community/posts", params={"category": "Nutrition", "tag": "protein"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertIn(post["id"], [p["id"] for p in resp.json()["posts"]])

        resp = self.client.get("/api/community/posts", params={"search": "RUNNERS"})
        self.assertEqual([p["id"] for p in resp.json()["posts"]], [post["id"]])

        resp = self.client.get("/api/community/posts", params={"sort": "oldest"})
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(
            "/api/community/posts",
            json={"title": "Wrong place", "content": "x", "category": "Gardening"},
            headers=self.alice["headers"],
        )
        self.assertEqual(resp.status_code, 422)

        self.assertEqual(self.client.post("/api/community/posts", json={"title": "anon", "content": "x"}).status_code, 401)

    def test_long_tags_are_deduplicated_after_truncation(self) -> None:
        stem = "intermittent-fasting-questions"
        post = self._post(self.bob, title="Fasting windows", tags=[stem + "-part-one", stem + "-part-two", "Sleep"])
        self.assertEqual(post["tags"], [stem, "sleep"])

    def test_views_and_author_only_edit(self) -> None:
        post = self._post(self.alice)
        self.client.get(f"/api/community/posts/{post['id']}")
        resp = self.client.get(f"/api/community/posts/{post['id']}")
        self.assertEqual(resp.json()["post"]["views"], 2)

        resp = self.client.patch(
            f"/api/community/posts/{post['id']}", json={"title": "Hijacked"}, headers=self.bob["headers"]
        )
        self.assertEqual(resp.status_code, 403)

        resp = self.client.patch(
            f"/api/community/posts/{post['id']}", json={"title": "Protein on a tight budget"}, headers=self.alice["headers"]
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["title"], "Protein on a tight budget")

        self.assertEqual(self.client.get("/api/community/posts/missing").status_code, 404)

    def test_comments_threads_and_solution(self) -> None:
        post = self._post(self.alice)
        resp = self.client.post(
            f"/api/community/posts/{post['id']}/comments", json={"content": "Lentils!"}, headers=self.bob["headers"]
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        comment = resp.json()["comment"]

        resp = self.client.post(
            f"/api/community/posts/{post['id']}/comments",
            json={"content": "Agreed", "parent_id": comment["id"]},
            headers=self.alice["headers"],
        )
        self.assertEqual(resp.status_code, 200, resp.text)

        resp = self.client.post(
            f"/api/community/posts/{post['id']}/comments",
            json={"content": "orphan", "parent_id": "nope"},
            headers=self.alice["headers"],
        )
        self.assertEqual(resp.status_code, 404)

        detail = self.client.get(f"/api/community/posts/{post['id']}").json()
        self.assertEqual(detail["post"]["comments"], 2)
        self.assertEqual(len(detail["comments"]), 1)
        self.assertEqual(detail["comments"][0]["replies"][0]["content"], "Agreed")

        resp = self.client.post(f"/api/community/comments/{comment['id']}/solution", headers=self.bob["headers"])
        self.assertEqual(resp.status_code, 403)
        resp = self.client.post(f"/api/community/comments/{comment['id']}/solution", headers=self.alice["headers"])
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertTrue(resp.json()["is_solution"])

        rep = self.client.get(f"/api/community/users/{self.bob['id']}/reputation").json()
        self.assertGreaterEqual(rep["solutions"], 1)

    def test_reactions_toggle(self) -> None:
        post = self._post(self.alice)
        url = f"/api/community/posts/{post['id']}/reactions"

        resp = self.client.post(url, json={"reaction": "like"}, headers=self.bob["headers"])
        self.assertEqual((resp.json()["action"], resp.json()["likes"]), ("added", 1))
        resp = self.client.post(url, json={"reaction": "dislike"}, headers=self.bob["headers"])
        self.assertEqual((resp.json()["action"], resp.json()["likes"], resp.json()["dislikes"]), ("switched", 0, 1))
        resp = self.client.post(url, json={"reaction": "dislike"}, headers=self.bob["headers"])
        self.assertEqual((resp.json()["action"], resp.json()["dislikes"]), ("removed", 0))

        resp = self.client.post(url, json={"reaction": "love"}, headers=self.bob["headers"])
        self.assertEqual(resp.status_code, 422)

    def test_moderation_lock_and_delete(self) -> None:
        post = self._post(self.alice)
        url = f"/api/community/posts/{post['id']}/moderate"

        self.assertEqual(self.client.post(url, json={"is_locked": True}, headers=self.bob["headers"]).status_code, 403)

        resp = self.client.post(url, json={"is_locked": True, "is_pinned": True}, headers=self.admin["headers"])
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertTrue(resp.json()["is_locked"])

        resp = self.client.post(
            f"/api/community/posts/{post['id']}/comments", json={"content": "late"}, headers=self.bob["headers"]
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["detail"], "Post is locked")

        latest = self.client.get("/api/community/posts").json()["posts"]
        self.assertEqual(latest[0]["id"], post["id"])

        self.assertEqual(
            self.client.delete(f"/api/community/posts/{post['id']}", headers=self.bob["headers"]).status_code, 403
        )
        self.assertEqual(
            self.client.delete(f"/api/community/posts/{post['id']}", headers=self.admin["headers"]).status_code, 200
        )
        self.assertEqual(self.client.get(f"/api/community/posts/{post['id']}").status_code, 404)

    def test_challenges(self) -> None:
        future = (date.today() + timedelta(days=14)).isoformat()
        past = (date.today() - timedelta(days=3)).isoformat()
        payload = {"title": "10k steps week", "description": "Walk every day", "end_date": future}

        self.assertEqual(
            self.client.post("/api/community/challenges", json=payload, headers=self.bob["headers"]).status_code, 403
        )
        resp = self.client.post("/api/community/challenges", json=payload, headers=self.admin["headers"])
        self.assertEqual(resp.status_code, 200, resp.text)
        challenge = resp.json()

        resp = self.client.post(
            "/api/community/challenges", json={**payload, "title": "Old one", "end_date": past}, headers=self.admin["headers"]
        )
        expired = resp.json()

        resp = self.client.post(f"/api/community/challenges/{challenge['id']}/join", headers=self.bob["headers"])
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["challenge"]["participants"], 1)
        self.assertTrue(resp.json()["challenge"]["joined"])
        self.assertEqual(resp.json()["reward"]["points_awarded"], 5)

        resp = self.client.post(f"/api/community/challenges/{challenge['id']}/join", headers=self.bob["headers"])
        self.assertEqual(resp.status_code, 409)
        resp = self.client.post(f"/api/community/challenges/{expired['id']}/join", headers=self.bob["headers"])
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post("/api/community/challenges/nope/join", headers=self.bob["headers"])
        self.assertEqual(resp.status_code, 404)

        active = self.client.get("/api/community/challenges").json()["challenges"]
        self.assertNotIn(expired["id"], [c["id"] for c in active])
        everything = self.client.get("/api/community/challenges", params={"include_expired": True}).json()
        self.assertIn(expired["id"], [c["id"] for c in everything["challenges"]])

    def test_admin_requires_role(self) -> None:
        self.assertEqual(self.client.get("/api/admin/stats").status_code, 401)
        self.assertEqual(self.client.get("/api/admin/stats", headers=self.bob["headers"]).status_code, 403)

    def test_admin_stats_users_and_activity(self) -> None:
        resp = self.client.get("/api/admin/stats", headers=self.admin["headers"])
        self.assertEqual(resp.status_code, 200, resp.text)
        stats = resp.json()
        self.assertGreaterEqual(stats["total_users"], 3)
        self.assertIn("uptime_seconds", stats)
        self.assertIn("storage_used_bytes", stats)

        resp = self.client.get("/api/admin/users", params={"search": "alice"}, headers=self.admin["headers"])
        users = resp.json()["users"]
        self.assertEqual([u["email"] for u in users], ["alice@example.com"])
        self.assertIn("points", users[0])
        self.assertNotIn("password_hash", users[0])

        resp = self.client.get("/api/admin/users", params={"role": "wizard"}, headers=self.admin["headers"])
        self.assertEqual(resp.status_code, 400)

        resp = self.client.get("/api/admin/activity", params={"limit": 5}, headers=self.admin["headers"])
        self.assertEqual(resp.status_code, 200)
        self.assertLessEqual(resp.json()["count"], 5)

    def test_streaks_for_many_users(self) -> None:
        from vitapulse.admin.storage import current_streaks  # noqa: WPS433 (module reloaded in setUpClass)

        ids = [f"missing-{i}" for i in range(1500)] + [self.alice["id"]]
        streaks = current_streaks(ids)
        self.assertEqual(streaks[self.alice["id"]], 1)
        self.assertNotIn("missing-0", streaks)
        self.assertEqual(current_streaks([]), {})

    def test_admin_updates_roles_and_bans(self) -> None:
        target = self._register("carol@example.com", "Carol Member")

        resp = self.client.patch(
            f"/api/admin/users/{target['id']}", json={"role": "moderator"}, headers=self.admin["headers"]
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["role"], "moderator")

        # Moderators can now lock posts.
        post = self._post(self.alice)
        resp = self.client.post(
            f"/api/community/posts/{post['id']}/moderate", json={"is_pinned": True}, headers=target["headers"]
        )
        self.assertEqual(resp.status_code, 200, resp.text)

        resp = self.client.patch(
            f"/api/admin/users/{target['id']}", json={"status": "banned"}, headers=self.admin["headers"]
        )
        self.assertEqual(resp.json()["status"], "banned")
        self.assertEqual(self.client.get("/api/auth/me", headers=target["headers"]).status_code, 403)
        resp = self.client.post("/api/auth/login", json={"email": "carol@example.com", "password": "password123"})
        self.assertEqual(resp.status_code, 403)

        resp = self.client.patch(
            f"/api/admin/users/{self.admin['id']}", json={"role": "user"}, headers=self.admin["headers"]
        )
        self.assertEqual(resp.status_code, 400)
        resp = self.client.patch("/api/admin/users/nope", json={"status": "active"}, headers=self.admin["headers"])
        self.assertEqual(resp.status_code, 404)
        resp = self.client.patch(
            f"/api/admin/users/{target['id']}", json={"status": "vanished"}, headers=self.admin["headers"]
        )
        self.assertEqual(resp.status_code, 422)

        events = self.client.get("/api/admin/activity", headers=self.admin["headers"]).json()["events"]
        self.assertIn("admin_action", [e["event_type"] for e in events])


if __name__ == "__main__":
    unittest.main()
