"""HTTP tests for /auth routes and the auth gate."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from hrdesk.api.v1.auth import authorize, get_credential_store
from hrdesk.core.errors import ForbiddenError, UnauthenticatedError
from hrdesk.core.security import get_token_service
from hrdesk.main import app
from hrdesk.models import UserRole, UserStatus
from hrdesk.schemas.auth import CurrentUser
from hrdesk.services.auth import RECOVERY_MESSAGE
from support import API, ApiTestCase


class TestAliceScenario(ApiTestCase):
    """Register, log in, fail with a wrong password, change password."""

    def test_full_flow(self) -> None:
        resp = self.register("alice", "Secret123!", "Alice", "standard")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(
            resp.json(), {"username": "alice", "display_name": "Alice", "role": "standard"}
        )
        self.assertNotIn("password_hash", resp.text)
        self.assertNotIn("Secret123!", resp.text)

        resp = self.login("alice", "Secret123!")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["access_token"])
        self.assertEqual(body["token_type"], "bearer")
        self.assertEqual(body["expires_in"], 3600)
        self.assertEqual(body["user"]["access_count"], 1)
        headers = {"Authorization": f"Bearer {body['access_token']}"}

        resp = self.login("alice", "WrongPass")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["kind"], "InvalidCredentials")

        resp = self.client.post(
            f"{API}/auth/change-password",
            json={"current_password": "Secret123!", "new_password": "NewSecret456!"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200)

        self.assertEqual(self.login("alice", "Secret123!").status_code, 401)
        self.assertEqual(self.login("alice", "NewSecret456!").status_code, 200)

    def test_old_token_still_valid_after_password_change(self) -> None:
        self.add_user("alice")
        headers = self.token_for("alice")
        resp = self.client.post(
            f"{API}/auth/change-password",
            json={"current_password": "Secret123!", "new_password": "NewSecret456!"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            self.client.get(f"{API}/dashboard/metrics", headers=headers).status_code, 200
        )


class TestRegister(ApiTestCase):
    def test_duplicate_username_conflicts_and_keeps_record(self) -> None:
        self.add_user("alice", password="Secret123!", display_name="Alice")
        resp = self.register("alice", "Another123!", "Impostor", "admin")
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["kind"], "Conflict")

        user = self.get_user("alice")
        self.assertEqual(user.display_name, "Alice")
        self.assertEqual(user.role, UserRole.STANDARD)
        self.assertEqual(self.login("alice", "Secret123!").status_code, 200)

    def test_new_user_is_active_with_zero_access_count(self) -> None:
        self.register("bob", "Secret123!", "Bob", "admin")
        user = self.get_user("bob")
        self.assertEqual(user.status, UserStatus.ACTIVE)
        self.assertEqual(user.access_count, 0)
        self.assertNotEqual(user.password_hash, "Secret123!")

    def test_missing_fields_are_400(self) -> None:
        resp = self.client.post(f"{API}/auth/register", json={"username": "carol"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["kind"], "ValidationError")

    def test_empty_display_name_is_400(self) -> None:
        resp = self.register("carol", "Secret123!", "", "standard")
        self.assertEqual(resp.status_code, 400)

    def test_unknown_role_is_400(self) -> None:
        resp = self.register("carol", "Secret123!", "Carol", "superuser")
        self.assertEqual(resp.status_code, 400)

    def test_password_shorter_than_eight_is_400(self) -> None:
        resp = self.register("carol", "short", "Carol", "standard")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["kind"], "ValidationError")
        self.assertIsNone(self.get_user("carol"))

    def test_password_over_72_bytes_is_400(self) -> None:
        # 37 characters, 74 bytes in UTF-8.
        resp = self.register("carol", "é" * 37, "Carol", "standard")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["kind"], "ValidationError")
        self.assertIsNone(self.get_user("carol"))

    def test_passwords_sharing_first_72_bytes_are_distinct(self) -> None:
        prefix = "a" * 72
        self.assertEqual(self.register("carol", prefix, "Carol", "standard").status_code, 201)
        self.assertEqual(self.login("carol", prefix + "X").status_code, 401)
        self.assertEqual(self.login("carol", prefix).status_code, 200)


class TestLogin(ApiTestCase):
    def test_unknown_user_and_wrong_password_are_indistinguishable(self) -> None:
        self.add_user("alice")
        unknown = self.login("nobody", "Secret123!")
        wrong = self.login("alice", "WrongPass")
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.json(), wrong.json())

    def test_blocked_user_gets_forbidden_even_with_wrong_password(self) -> None:
        self.add_user("mallory", status=UserStatus.BLOCKED)
        resp = self.login("mallory", "WrongPass")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["kind"], "Forbidden")
        self.assertIn("blocked", resp.json()["detail"])
        self.assertEqual(self.get_user("mallory").access_count, 0)

    def test_inactive_user_gets_forbidden(self) -> None:
        self.add_user("ivan", status=UserStatus.INACTIVE)
        resp = self.login("ivan", "Secret123!")
        self.assertEqual(resp.status_code, 403)
        self.assertIn("inactive", resp.json()["detail"])

    def test_each_success_increments_access_count_by_one(self) -> None:
        self.add_user("alice")
        self.login("alice", "Secret123!")
        self.assertEqual(self.get_user("alice").access_count, 1)
        self.login("alice", "WrongPass")
        self.assertEqual(self.get_user("alice").access_count, 1)
        resp = self.login("alice", "Secret123!")
        self.assertEqual(resp.json()["user"]["access_count"], 2)
        self.assertEqual(self.get_user("alice").access_count, 2)

    def test_missing_password_is_400(self) -> None:
        resp = self.client.post(f"{API}/auth/login", json={"username": "alice"})
        self.assertEqual(resp.status_code, 400)

    def test_username_is_trimmed_like_registration(self) -> None:
        self.assertEqual(self.register(" alice ", "Secret123!", "Alice", "standard").status_code, 201)
        self.assertIsNotNone(self.get_user("alice"))
        resp = self.login(" alice ", "Secret123!")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["user"]["username"], "alice")


class TestChangePasswordRoute(ApiTestCase):
    def test_requires_token(self) -> None:
        resp = self.client.post(
            f"{API}/auth/change-password",
            json={"current_password": "Secret123!", "new_password": "NewSecret456!"},
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["kind"], "Unauthenticated")
        self.assertEqual(resp.headers["www-authenticate"], "Bearer")

    def test_wrong_current_password_is_401(self) -> None:
        self.add_user("alice")
        resp = self.client.post(
            f"{API}/auth/change-password",
            json={"current_password": "WrongPass", "new_password": "NewSecret456!"},
            headers=self.token_for("alice"),
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["kind"], "InvalidCredentials")

    def test_valid_token_for_missing_user_is_404(self) -> None:
        token = get_token_service().issue(CurrentUser(username="ghost", role=UserRole.STANDARD))
        resp = self.client.post(
            f"{API}/auth/change-password",
            json={"current_password": "Secret123!", "new_password": "NewSecret456!"},
            headers={"Authorization": f"Bearer {token}"},
        )
        self.assertEqual(resp.status_code, 404)

    def test_new_password_over_72_bytes_is_400(self) -> None:
        self.add_user("alice")
        resp = self.client.post(
            f"{API}/auth/change-password",
            json={"current_password": "Secret123!", "new_password": "a" * 73},
            headers=self.token_for("alice"),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.login("alice", "Secret123!").status_code, 200)


class TestRecoverPasswordRoute(ApiTestCase):
    def test_identical_reply_for_known_and_unknown_identifier(self) -> None:
        self.add_user("alice")
        known = self.client.post(f"{API}/auth/recover-password", json={"identifier": "alice"})
        unknown = self.client.post(f"{API}/auth/recover-password", json={"identifier": "ghost"})
        self.assertEqual(known.status_code, 200)
        self.assertEqual(unknown.status_code, 200)
        self.assertEqual(known.json(), unknown.json())
        self.assertEqual(known.json()["message"], RECOVERY_MESSAGE)
        self.notifier.send_recovery.assert_called_once()
        self.assertEqual(self.notifier.send_recovery.call_args.args[0].username, "alice")

    def test_accepts_email_field(self) -> None:
        resp = self.client.post(f"{API}/auth/recover-password", json={"email": "alice"})
        self.assertEqual(resp.status_code, 200)

    def test_missing_identifier_is_400(self) -> None:
        resp = self.client.post(f"{API}/auth/recover-password", json={})
        self.assertEqual(resp.status_code, 400)


class TestAuthGate(ApiTestCase):
    def test_missing_header_is_unauthenticated(self) -> None:
        resp = self.client.get(f"{API}/employees")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["kind"], "Unauthenticated")

    def test_non_bearer_scheme_is_unauthenticated(self) -> None:
        resp = self.client.get(f"{API}/employees", headers={"Authorization": "Basic abc"})
        self.assertEqual(resp.status_code, 401)

    def test_garbage_token_is_invalid_token(self) -> None:
        resp = self.client.get(f"{API}/employees", headers={"Authorization": "Bearer nope"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["kind"], "InvalidToken")

    def test_expired_token_is_invalid_token(self) -> None:
        token = get_token_service().issue(
            CurrentUser(username="alice", role=UserRole.ADMIN),
            now=datetime.now(UTC) - timedelta(hours=2),
        )
        resp = self.client.get(
            f"{API}/employees", headers={"Authorization": f"Bearer {token}"}
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["kind"], "InvalidToken")

    def test_standard_user_cannot_use_admin_route(self) -> None:
        self.add_user("alice")
        resp = self.client.get(f"{API}/auth/users", headers=self.token_for("alice"))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["kind"], "Forbidden")

    def test_authorize_without_identity(self) -> None:
        with self.assertRaises(UnauthenticatedError):
            authorize(None, UserRole.ADMIN)

    def test_authorize_role_mismatch(self) -> None:
        with self.assertRaises(ForbiddenError):
            authorize(CurrentUser(username="a", role=UserRole.STANDARD), UserRole.ADMIN)


class TestAccountAdministration(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.add_user("root", role=UserRole.ADMIN)
        self.add_user("alice")
        self.admin = self.token_for("root")

    def test_list_users_hides_hashes(self) -> None:
        resp = self.client.get(f"{API}/auth/users", headers=self.admin)
        self.assertEqual(resp.status_code, 200)
        users = resp.json()["users"]
        self.assertEqual([u["username"] for u in users], ["root", "alice"])
        self.assertNotIn("password_hash", resp.text)

    def test_block_then_login_is_forbidden(self) -> None:
        resp = self.client.patch(
            f"{API}/auth/users/alice/status", json={"status": "blocked"}, headers=self.admin
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "blocked")
        self.assertEqual(self.login("alice", "Secret123!").status_code, 403)

    def test_status_of_unknown_user_is_404(self) -> None:
        resp = self.client.patch(
            f"{API}/auth/users/ghost/status", json={"status": "inactive"}, headers=self.admin
        )
        self.assertEqual(resp.status_code, 404)


class TestInternalErrors(ApiTestCase):
    raise_server_exceptions = False

    def test_store_failure_is_500_without_detail_leak(self) -> None:
        store = MagicMock()
        store.find_by_username.side_effect = OperationalError("SELECT", {}, Exception("db down at 10.0.0.5"))
        app.dependency_overrides[get_credential_store] = lambda: store
        resp = self.login("alice", "Secret123!")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["kind"], "Internal")
        self.assertNotIn("10.0.0.5", resp.text)


if __name__ == "__main__":
    unittest.main()
