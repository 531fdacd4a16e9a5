"""Tests for the HTTP routes (auth, users, messages)."""

import unittest

from fastapi.testclient import TestClient

from auth import security
from core.config import Settings, get_settings
from main import app

from fakes import FakeStore

SETTINGS = Settings(secret_key="route-secret", bcrypt_work_factor=4)


class RoutesTestCase(unittest.TestCase):

    def setUp(self):
        """Fake store, test settings, and a client without lifespan (no DB pool)."""
        self.store = FakeStore()
        self.patches = self.store.patched()
        self.patches.__enter__()
        app.dependency_overrides[get_settings] = lambda: SETTINGS
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.patches.close()

    def _register(self, username, password="secret-pw", first_name=None):
        response = self.client.post("/auth/register", json={
            "username": username,
            "password": password,
            "first_name": first_name or username.title(),
            "last_name": "Test",
            "phone": "555-0000",
        })
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["token"]

    def _auth(self, token):
        return {"Authorization": f"Bearer {token}"}


class TestAuthRoutes(RoutesTestCase):

    def test_register_returns_token(self):
        token = self._register("alice")

        self.assertEqual(security.decode_token(token, SETTINGS), "alice")
        self.assertIsNotNone(self.store.users["alice"]["last_login_at"])

    def test_register_duplicate_conflict(self):
        self._register("alice")
        response = self.client.post("/register", json={
            "username": "alice",
            "password": "x",
            "first_name": "A",
            "last_name": "B",
            "phone": "1",
        })

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"]["status"], 409)

    def test_register_missing_field(self):
        response = self.client.post("/auth/register", json={"username": "alice"})
        self.assertEqual(response.status_code, 422)

    def test_login(self):
        self._register("alice", password="pw")

        response = self.client.post("/login", json={"username": "alice", "password": "pw"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(security.decode_token(response.json()["token"], SETTINGS), "alice")

    def test_login_bad_credentials(self):
        self._register("alice", password="pw")

        wrong = self.client.post("/auth/login", json={"username": "alice", "password": "nope"})
        unknown = self.client.post("/auth/login", json={"username": "ghost", "password": "pw"})

        self.assertEqual(wrong.status_code, 400)
        self.assertEqual(unknown.status_code, 400)
        self.assertEqual(wrong.json(), unknown.json())

    def test_login_oversized_credentials_same_as_wrong_password(self):
        self._register("alice", password="pw")

        wrong = self.client.post("/login", json={"username": "alice", "password": "nope"})
        long_username = self.client.post("/login", json={"username": "g" * 65, "password": "pw"})
        long_password = self.client.post("/login", json={"username": "alice", "password": "x" * 73})

        for response in (long_username, long_password):
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json(), wrong.json())
        self.assertNotIn("x" * 73, long_password.text)


class TestAuthRequired(RoutesTestCase):

    def test_missing_token(self):
        response = self.client.get("/users")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers.get("www-authenticate"), "Bearer")

    def test_bad_scheme(self):
        response = self.client.get("/users", headers={"Authorization": "Token abc"})
        self.assertEqual(response.status_code, 401)

    def test_token_signed_with_other_secret(self):
        token = security.build_token("alice", Settings(secret_key="elsewhere"))
        response = self.client.get("/users", headers=self._auth(token))
        self.assertEqual(response.status_code, 401)


class TestUserRoutes(RoutesTestCase):

    def setUp(self):
        super().setUp()
        self.alice = self._register("alice", first_name="Alice")
        self.bob = self._register("bob", first_name="Bob")

    def test_list_users(self):
        response = self.client.get("/users", headers=self._auth(self.bob))

        self.assertEqual(response.status_code, 200)
        users = response.json()["users"]
        self.assertEqual([u["username"] for u in users], ["alice", "bob"])
        self.assertNotIn("password", users[0])

    def test_get_own_profile(self):
        response = self.client.get("/users/alice", headers=self._auth(self.alice))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["first_name"], "Alice")

    def test_get_other_profile_forbidden(self):
        response = self.client.get("/users/alice", headers=self._auth(self.bob))
        self.assertEqual(response.status_code, 403)

    def test_messages_to_and_from(self):
        self.client.post(
            "/messages", json={"to_username": "bob", "body": "hi"}, headers=self._auth(self.alice)
        )

        sent = self.client.get("/users/alice/from", headers=self._auth(self.alice))
        received = self.client.get("/users/bob/to", headers=self._auth(self.bob))
        snooping = self.client.get("/users/bob/to", headers=self._auth(self.alice))

        self.assertEqual(sent.json()["messages"][0]["to_user"]["username"], "bob")
        self.assertEqual(received.json()["messages"][0]["from_user"]["username"], "alice")
        self.assertEqual(snooping.status_code, 403)


class TestMessageRoutes(RoutesTestCase):

    def setUp(self):
        super().setUp()
        self.alice = self._register("alice")
        self.bob = self._register("bob")
        self.eve = self._register("eve")
        response = self.client.post(
            "/messages",
            json={"to_username": "bob", "body": "hello"},
            headers=self._auth(self.alice),
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.message = response.json()["message"]

    def test_send_message(self):
        self.assertEqual(self.message["from_username"], "alice")
        self.assertEqual(self.message["to_username"], "bob")
        self.assertEqual(self.message["body"], "hello")

    def test_send_to_unknown_user(self):
        response = self.client.post(
            "/messages",
            json={"to_username": "ghost", "body": "hello"},
            headers=self._auth(self.alice),
        )
        self.assertEqual(response.status_code, 400)

    def test_get_message_as_participant(self):
        response = self.client.get(f"/messages/{self.message['id']}", headers=self._auth(self.bob))

        self.assertEqual(response.status_code, 200)
        message = response.json()["message"]
        self.assertEqual(message["from_user"]["username"], "alice")
        self.assertEqual(message["to_user"]["username"], "bob")
        self.assertIsNone(message["read_at"])

    def test_get_message_as_outsider(self):
        response = self.client.get(f"/messages/{self.message['id']}", headers=self._auth(self.eve))

        self.assertEqual(response.status_code, 403)
        self.assertIn("error", response.json())

    def test_get_missing_message(self):
        response = self.client.get("/messages/999", headers=self._auth(self.alice))
        self.assertEqual(response.status_code, 404)

    def test_message_id_outside_int4_rejected(self):
        for message_id in (0, 2_147_483_648, 3_000_000_000):
            viewed = self.client.get(f"/messages/{message_id}", headers=self._auth(self.bob))
            marked = self.client.post(
                f"/messages/{message_id}/read", headers=self._auth(self.bob)
            )
            self.assertEqual(viewed.status_code, 422)
            self.assertEqual(marked.status_code, 422)

    def test_largest_message_id_is_not_found(self):
        response = self.client.get("/messages/2147483647", headers=self._auth(self.bob))
        self.assertEqual(response.status_code, 404)

    def test_mark_read_by_recipient(self):
        url = f"/messages/{self.message['id']}/read"

        first = self.client.post(url, headers=self._auth(self.bob))
        second = self.client.post(url, headers=self._auth(self.bob))

        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["message"]["id"], self.message["id"])
        self.assertIsNotNone(first.json()["message"]["read_at"])
        self.assertEqual(second.json(), first.json())

    def test_mark_read_by_sender_forbidden(self):
        response = self.client.post(
            f"/messages/{self.message['id']}/read", headers=self._auth(self.alice)
        )
        self.assertEqual(response.status_code, 403)

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})


if __name__ == "__main__":
    unittest.main()
