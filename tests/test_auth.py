import unittest
from datetime import timedelta

from flask_jwt_extended import create_access_token, decode_token

from expense_backend import create_app
from expense_backend.errors import InvalidTokenError, MissingTokenError, StoreError
from expense_backend.models import Identity
from tests.fakes import InMemoryStore, StubClassifier

TEST_CONFIG = {"JWT_SECRET_KEY": "test-secret", "TESTING": True}


class TestSessionManager(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryStore()
        self.app = create_app(TEST_CONFIG, store=self.store, classifier=StubClassifier())
        self.ctx = self.app.app_context()
        self.ctx.push()
        self.sessions = self.app.extensions["session_manager"]

    def tearDown(self):
        self.ctx.pop()

    def test_issue_then_verify_round_trip(self):
        token, user_id = self.sessions.issue("a@x.com")
        self.assertEqual(self.sessions.verify(token), Identity(id=user_id, email="a@x.com"))

    def test_issue_registers_identity_with_store(self):
        _, user_id = self.sessions.issue("a@x.com")
        self.assertEqual(self.store.users[user_id], {"id": user_id, "email": "a@x.com"})

    def test_each_signup_gets_a_fresh_identity(self):
        _, first = self.sessions.issue("a@x.com")
        _, second = self.sessions.issue("a@x.com")
        self.assertNotEqual(first, second)

    def test_registration_failure_issues_no_token(self):
        self.store.fail_with = "users insert rejected"
        with self.assertRaises(StoreError):
            self.sessions.issue("a@x.com")
        self.assertEqual(self.store.users, {})

    def test_missing_token(self):
        with self.assertRaises(MissingTokenError):
            self.sessions.verify(None)
        with self.assertRaises(MissingTokenError):
            self.sessions.verify("")

    def test_tampered_token_is_invalid(self):
        token, _ = self.sessions.issue("a@x.com")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload[:-2] + ("AA" if payload[-2:] != "AA" else "BB"), signature])
        with self.assertRaises(InvalidTokenError):
            self.sessions.verify(tampered)

    def test_garbage_token_is_invalid(self):
        with self.assertRaises(InvalidTokenError):
            self.sessions.verify("not-a-jwt")

    def test_token_signed_with_other_secret_is_invalid(self):
        other = create_app({"JWT_SECRET_KEY": "another-secret"},
                           store=InMemoryStore(), classifier=StubClassifier())
        with other.app_context():
            foreign, _ = other.extensions["session_manager"].issue("a@x.com")
        with self.assertRaises(InvalidTokenError):
            self.sessions.verify(foreign)

    def test_expired_token_is_invalid(self):
        expired = create_access_token(identity="u1", additional_claims={"email": "a@x.com"},
                                      expires_delta=timedelta(seconds=-1))
        with self.assertRaises(InvalidTokenError) as ctx:
            self.sessions.verify(expired)
        self.assertEqual(ctx.exception.message, "Token expired")


class TestTokenExpiryPolicy(unittest.TestCase):

    def test_default_lifetime_is_seven_days(self):
        app = create_app(TEST_CONFIG, store=InMemoryStore(), classifier=StubClassifier())
        self.assertEqual(app.config["JWT_ACCESS_TOKEN_EXPIRES"], timedelta(hours=168))

    def test_zero_hours_disables_expiry(self):
        app = create_app(dict(TEST_CONFIG, TOKEN_EXPIRES_HOURS=0),
                         store=InMemoryStore(), classifier=StubClassifier())
        self.assertIs(app.config["JWT_ACCESS_TOKEN_EXPIRES"], False)
        with app.app_context():
            token, _ = app.extensions["session_manager"].issue("a@x.com")
            self.assertNotIn("exp", decode_token(token))


class TestSignupRoute(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryStore()
        self.app = create_app(TEST_CONFIG, store=self.store, classifier=StubClassifier())
        self.client = self.app.test_client()

    def test_signup_returns_token_and_user_id(self):
        resp = self.client.post("/signup", json={"email": "a@x.com"})
        self.assertEqual(resp.status_code, 200)
        body = resp.get_json()
        self.assertIn("token", body)
        self.assertIn(body["userId"], self.store.users)

    def test_signup_store_failure_is_400_without_token(self):
        self.store.fail_with = "permission denied for table users"
        resp = self.client.post("/signup", json={"email": "a@x.com"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json(), {"error": "Store operation failed"})

    def test_signup_non_object_body_is_400(self):
        resp = self.client.post("/signup", json=["a@x.com"])
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json(), {"error": "Request body must be a JSON object"})
        self.assertEqual(self.store.users, {})

    def test_signup_without_signing_secret_registers_nobody(self):
        app = create_app({"JWT_SECRET_KEY": None, "SECRET_KEY": None, "TESTING": True},
                         store=self.store, classifier=StubClassifier())
        resp = app.test_client().post("/signup", json={"email": "a@x.com"})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.get_json(), {"error": "Token signing is not configured"})
        self.assertEqual(self.store.users, {})

if __name__ == "__main__":
    unittest.main()
