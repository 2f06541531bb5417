"""Unit tests for the value types."""

import unittest

from pydantic import ValidationError

from mentor_client.core.models import (
    Credentials,
    Direction,
    Language,
    LocaleState,
    SessionState,
    User,
    direction_for,
)


class ModelTests(unittest.TestCase):
    def test_user_is_frozen(self) -> None:
        user = User(id="u1", email="a@b.com", user_type="mentee")
        with self.assertRaises(ValidationError):
            user.email = "other@b.com"  # type: ignore[misc]

    def test_user_type_is_restricted(self) -> None:
        with self.assertRaises(ValidationError):
            User(id="u1", email="a@b.com", user_type="admin")

    def test_session_state_requires_user_only_when_authenticated(self) -> None:
        user = User(id="u1", email="a@b.com", user_type="mentor")
        self.assertEqual(SessionState.authenticated(user).user, user)
        with self.assertRaises(ValidationError):
            SessionState(status="anonymous", user=user)
        with self.assertRaises(ValidationError):
            SessionState(status="authenticated")

    def test_locale_direction_is_derived(self) -> None:
        self.assertIs(direction_for(Language.AR), Direction.RTL)
        self.assertIs(LocaleState.for_language(Language.EN).direction, Direction.LTR)
        with self.assertRaises(ValidationError):
            LocaleState(language=Language.AR, direction=Direction.LTR)

    def test_credentials_hide_password(self) -> None:
        credentials = Credentials(email=" a@b.com ", password="secret")
        self.assertEqual(credentials.email, "a@b.com")
        self.assertNotIn("secret", repr(credentials))
        with self.assertRaises(ValidationError):
            Credentials(email="a@b.com", password="")


if __name__ == "__main__":
    unittest.main()
