"""End-to-end tests through the HTTP API."""

import base64
import unittest

from docuploader.models import ConfirmationToken, PasswordResetToken, User
from tests.support import ApiTestCase, registration_payload

API = "/api/v1"


def document_body(name: str = "report.pdf", content: bytes = b"hello") -> dict:
    return {"content": base64.b64encode(content).decode("ascii"), "name": name, "extension": "pdf"}


class RegisteredApiTestCase(ApiTestCase):
    def register(self, **kwargs: str) -> None:
        response = self.client.post(f"{API}/register", json=registration_payload(**kwargs))
        self.assertEqual(response.status_code, 204, response.text)

    def confirmation_token(self, email: str = "a@b.com") -> str:
        self.db.expire_all()
        return (
            self.db.query(ConfirmationToken)
            .join(User, User.id == ConfirmationToken.user_id)
            .filter(User.email == email)
            .one()
            .token
        )

    def account_id(self, name: str = "acct1") -> int:
        response = self.client.get(f"{API}/accounts", params={"name": name})
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["id"]


class TestRegistrationApi(RegisteredApiTestCase):
    def test_register_then_user_is_disabled(self) -> None:
        self.register()

        response = self.client.get(f"{API}/users", params={"email": "a@b.com"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["email"], "a@b.com")
        self.assertEqual(body["firstName"], "A")
        self.assertFalse(body["enabled"])
        self.assertNotIn("password", body)

        enabled = self.client.get(f"{API}/users/a@b.com/is-enabled")
        self.assertIs(enabled.json(), False)
        self.assertEqual(len(self.sent_emails()), 1)

    def test_duplicate_email_is_400(self) -> None:
        self.register()
        response = self.client.post(
            f"{API}/register",
            json=registration_payload(account_name="acct2"),
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("could not be saved", response.json()["detail"])

    def test_invalid_payload_reports_fields(self) -> None:
        payload = registration_payload(email="not-an-email")
        payload["account"]["serviceLevel"] = "PLATINUM"
        response = self.client.post(f"{API}/register", json=payload)
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertIn("user.email", body)
        self.assertIn("account.serviceLevel", body)

    def test_malformed_email_is_rejected(self) -> None:
        for email in ("a@b..com", "a@.b.com", "a b@c.com", "no-at-sign.com"):
            with self.subTest(email=email):
                response = self.client.post(
                    f"{API}/register",
                    json=registration_payload(email=email, account_name=f"acct-{len(email)}"),
                )
                self.assertEqual(response.status_code, 400)
                self.assertIn("user.email", response.json())
        self.db.expire_all()
        self.assertEqual(self.db.query(User).count(), 0)
        self.assertEqual(self.sent_emails(), [])

    def test_confirm_activates_once(self) -> None:
        self.register()
        token = self.confirmation_token()

        first = self.client.patch(f"{API}/register/confirm", json=token)
        self.assertEqual(first.status_code, 200)
        self.assertIs(first.json(), True)
        self.assertIs(self.client.get(f"{API}/users/a@b.com/is-enabled").json(), True)

        second = self.client.patch(f"{API}/register/confirm", json=token)
        self.assertIs(second.json(), False)


class TestUserApi(RegisteredApiTestCase):
    def test_unknown_user_is_404(self) -> None:
        response = self.client.get(f"{API}/users", params={"email": "nobody@example.com"})
        self.assertEqual(response.status_code, 404)
        self.assertIn("nobody@example.com", response.json()["detail"])

    def test_lookup_requires_a_parameter(self) -> None:
        self.assertEqual(self.client.get(f"{API}/users").status_code, 400)

    def test_lookup_by_id(self) -> None:
        self.register()
        user_id = self.client.get(f"{API}/users", params={"email": "a@b.com"}).json()["id"]
        response = self.client.get(f"{API}/users", params={"id": user_id})
        self.assertEqual(response.json()["email"], "a@b.com")

    def test_password_reset_flow(self) -> None:
        self.register()
        self.register(email="c@d.com", account_name="acct2")

        response = self.client.post(f"{API}/users/a@b.com/reset-password")
        self.assertEqual(response.status_code, 204)
        self.db.expire_all()
        token = self.db.query(PasswordResetToken).one().token

        valid = self.client.get(f"{API}/users/reset-password/token", params={"token": token})
        self.assertIs(valid.json(), True)

        hijack = self.client.post(
            f"{API}/users/reset-password",
            params={"email": "c@d.com", "newPassword": "pw", "token": token},
        )
        self.assertEqual(hijack.status_code, 400)

        changed = self.client.post(
            f"{API}/users/reset-password",
            params={"email": "a@b.com", "newPassword": "new-pw", "token": token},
        )
        self.assertEqual(changed.status_code, 204)

        again = self.client.post(
            f"{API}/users/reset-password",
            params={"email": "a@b.com", "newPassword": "other", "token": token},
        )
        self.assertEqual(again.status_code, 400)
        self.assertIn("expired or invalid", again.json()["detail"])

        unknown = self.client.post(
            f"{API}/users/reset-password",
            params={"email": "a@b.com", "newPassword": "other", "token": "nope"},
        )
        self.assertEqual(unknown.status_code, 404)

    def test_change_password_rejects_malformed_email(self) -> None:
        response = self.client.post(
            f"{API}/users/reset-password",
            params={"email": "a@b..com", "newPassword": "pw", "token": "t"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("email", response.json())

    def test_reset_for_unknown_email_is_404(self) -> None:
        response = self.client.post(f"{API}/users/nobody@example.com/reset-password")
        self.assertEqual(response.status_code, 404)

    def test_update_password(self) -> None:
        self.register()
        response = self.client.put(f"{API}/users", json={"email": "a@b.com", "password": "changed"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["email"], "a@b.com")


class TestAuthApi(RegisteredApiTestCase):
    def test_login_requires_activation(self) -> None:
        self.register()
        response = self.client.post(f"{API}/auth", json={"email": "a@b.com", "password": "x"})
        self.assertEqual(response.status_code, 403)

    def test_login_and_me(self) -> None:
        self.register()
        self.client.patch(f"{API}/register/confirm", json=self.confirmation_token())

        bad = self.client.post(f"{API}/auth", json={"email": "a@b.com", "password": "wrong"})
        self.assertEqual(bad.status_code, 401)

        response = self.client.post(f"{API}/auth", json={"email": "a@b.com", "password": "x"})
        self.assertEqual(response.status_code, 200)
        token = response.json()["access_token"]

        me = self.client.get(f"{API}/users/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["email"], "a@b.com")

    def test_me_without_token_is_401(self) -> None:
        self.assertEqual(self.client.get(f"{API}/users/me").status_code, 401)

    def test_auth_groups_by_username(self) -> None:
        self.register(role="ROLE_ADMIN")
        response = self.client.get(f"{API}/auth-groups", params={"username": "a@b.com"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual([g["role"] for g in response.json()], ["ROLE_ADMIN"])
        empty = self.client.get(f"{API}/auth-groups", params={"username": "nobody@example.com"})
        self.assertEqual(empty.json(), [])


class TestAccountApi(RegisteredApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.register()
        self.dispatcher.join()
        self.transport.sent.clear()

    def test_account_payload(self) -> None:
        body = self.client.get(f"{API}/accounts", params={"name": "acct1"}).json()
        self.assertEqual(body["serviceLevel"], "BRONZE")
        self.assertEqual(body["owner"]["email"], "a@b.com")
        self.assertEqual([u["email"] for u in body["users"]], ["a@b.com"])
        self.assertEqual(body["documents"], [])

    def test_unknown_account_is_404(self) -> None:
        self.assertEqual(self.client.get(f"{API}/accounts", params={"id": 999}).status_code, 404)

    def test_create_account_sets_location(self) -> None:
        owner_id = self.client.get(f"{API}/users", params={"email": "a@b.com"}).json()["id"]
        response = self.client.post(
            f"{API}/accounts",
            json={"name": "team", "serviceLevel": "GOLD", "ownerId": owner_id},
        )
        self.assertEqual(response.status_code, 201, response.text)
        self.assertTrue(response.headers["location"].endswith(f"/accounts/{response.json()['id']}"))

        listed = self.client.get(f"{API}/accounts", params={"userId": owner_id}).json()
        self.assertEqual([a["name"] for a in listed], ["acct1", "team"])

    def test_add_and_remove_document(self) -> None:
        account_id = self.account_id()

        added = self.client.put(f"{API}/accounts/{account_id}/documents", json=document_body())
        self.assertEqual(added.status_code, 200, added.text)
        self.assertEqual([d["name"] for d in added.json()["documents"]], ["report.pdf"])
        self.assertEqual(len(self.sent_emails()), 1)

        removed = self.client.delete(
            f"{API}/accounts/{account_id}/documents",
            params={"documentName": "report.pdf"},
        )
        self.assertEqual(removed.status_code, 200)
        self.assertEqual(removed.json()["documents"], [])
        self.assertEqual(len(self.sent_emails()), 2)

    def test_duplicate_document_is_400(self) -> None:
        account_id = self.account_id()
        self.client.put(f"{API}/accounts/{account_id}/documents", json=document_body())

        response = self.client.put(f"{API}/accounts/{account_id}/documents", json=document_body())
        self.assertEqual(response.status_code, 400)
        detail = response.json()["detail"]
        self.assertIn("could not be saved", detail)
        self.assertIn("report.pdf", detail)

    def test_remove_missing_document_is_404(self) -> None:
        account_id = self.account_id()
        response = self.client.delete(
            f"{API}/accounts/{account_id}/documents",
            params={"documentName": "missing.pdf"},
        )
        self.assertEqual(response.status_code, 404)

    def test_members(self) -> None:
        self.register(email="c@d.com", account_name="acct2")
        account_id = self.account_id()

        added = self.client.put(f"{API}/accounts/{account_id}/users", params={"email": "c@d.com"})
        self.assertEqual([u["email"] for u in added.json()["users"]], ["a@b.com", "c@d.com"])

        owner = self.client.delete(f"{API}/accounts/{account_id}/users", params={"email": "a@b.com"})
        self.assertEqual(owner.status_code, 400)

        removed = self.client.delete(f"{API}/accounts/{account_id}/users", params={"email": "c@d.com"})
        self.assertEqual([u["email"] for u in removed.json()["users"]], ["a@b.com"])

    def test_update_account(self) -> None:
        account_id = self.account_id()
        response = self.client.put(
            f"{API}/accounts",
            json={"id": account_id, "name": "renamed", "serviceLevel": "ENTERPRISE"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["serviceLevel"], "ENTERPRISE")


class TestDocumentApi(ApiTestCase):
    def test_document_lifecycle(self) -> None:
        created = self.client.post(f"{API}/documents", json=document_body(content=b"\x00\x01binary"))
        self.assertEqual(created.status_code, 201, created.text)
        doc_id = created.json()["id"]
        self.assertTrue(created.headers["location"].endswith(f"/documents/{doc_id}"))

        fetched = self.client.get(f"{API}/documents", params={"id": doc_id}).json()
        self.assertEqual(base64.b64decode(fetched["content"]), b"\x00\x01binary")
        by_name = self.client.get(f"{API}/documents", params={"documentName": "report.pdf"}).json()
        self.assertEqual(by_name["id"], doc_id)

        self.assertEqual(self.client.delete(f"{API}/documents/{doc_id}").status_code, 204)
        self.assertEqual(self.client.get(f"{API}/documents", params={"id": doc_id}).status_code, 404)
        self.assertEqual(self.client.delete(f"{API}/documents/{doc_id}").status_code, 404)

    def test_empty_content_is_rejected(self) -> None:
        response = self.client.post(f"{API}/documents", json=document_body(content=b""))
        self.assertEqual(response.status_code, 400)
        self.assertIn("content", response.json())


class TestHealthApi(ApiTestCase):
    def test_health(self) -> None:
        response = self.client.get(f"{API}/health/")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")
        self.assertEqual(body["notifications"], "running")


if __name__ == "__main__":
    unittest.main()
