import unittest

from nexgen.config import Settings
from nexgen.core.constants import NEVER_LOGGED_IN
from nexgen.services.auth_service import AuthService
from nexgen.store import MemoryKeyValueStore

FAST_SETTINGS = Settings(PASSWORD_PBKDF2_ROUNDS=1000)


class AuthServiceTest(unittest.TestCase):
    def setUp(self):
        self.store = MemoryKeyValueStore()
        self.auth = AuthService(self.store, settings=FAST_SETTINGS)
        self.users = self.auth.users

    def test_username_match_is_case_insensitive(self):
        user = self.auth.authenticate("  dhruv JAIN ", "admindhruv1234")

        self.assertIsNotNone(user)
        self.assertEqual(user.id, "admin-1")

    def test_successful_login_records_last_login(self):
        created = self.users.create({"username": "Asha", "email": "asha@nexgen.com", "password": "s3cret"})
        self.assertEqual(created.last_login, NEVER_LOGGED_IN)

        user = self.auth.authenticate("asha", "s3cret")

        self.assertNotEqual(user.last_login, NEVER_LOGGED_IN)
        self.assertEqual(self.users.get(created.id).last_login, user.last_login)

    def test_wrong_password_and_unknown_user_return_none(self):
        self.assertIsNone(self.auth.authenticate("John Staff", "wrong"))
        self.assertIsNone(self.auth.authenticate("Nobody", "password123"))
        self.assertIsNone(self.auth.authenticate("", ""))

    def test_rejected_login_does_not_log_credentials(self):
        with self.assertLogs("nexgen.services.auth_service", level="DEBUG") as captured:
            self.assertIsNone(self.auth.authenticate("Mallory Typed This", "hunter2"))

        output = "\n".join(captured.output)
        self.assertIn("Login rejected", output)
        self.assertNotIn("Mallory", output)
        self.assertNotIn("hunter2", output)

    def test_inactive_account_returns_none(self):
        self.users.update("user-1", {"status": "INACTIVE"})
        before = self.users.get("user-1").last_login

        self.assertIsNone(self.auth.authenticate("John Staff", "password123"))
        self.assertEqual(self.users.get("user-1").last_login, before)

    def test_password_change_takes_effect(self):
        self.users.update("user-1", {"password": "rotated"})

        self.assertIsNone(self.auth.authenticate("John Staff", "password123"))
        self.assertIsNotNone(self.auth.authenticate("John Staff", "rotated"))


if __name__ == "__main__":
    unittest.main()
