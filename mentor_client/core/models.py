"""Value types shared by the session and locale stores."""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator, model_validator


class User(BaseModel):
    """Identity record returned by the auth boundary.

    Instances are frozen: a newer probe or login replaces the record as a
    whole instead of patching fields.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str
    email: str
    name: Optional[str] = None
    user_type: Literal["mentor", "mentee"]

    @model_validator(mode="before")
    @classmethod
    def _accept_camel_case(cls, data: object) -> object:
        """Allow ``userType`` as well as the wire name ``user_type``."""

        if isinstance(data, dict) and "userType" in data and "user_type" not in data:
            data = dict(data)
            data["user_type"] = data.pop("userType")
        return data


class Credentials(BaseModel):
    """Email/password pair submitted on login."""

    model_config = ConfigDict(frozen=True)

    email: str
    password: SecretStr

    @field_validator("email")
    @classmethod
    def _email_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("email is required")
        return value

    @field_validator("password")
    @classmethod
    def _password_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("password is required")
        return value


class SessionStatus(str, Enum):
    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class SessionState(BaseModel):
    """Tri-valued view of the session cache entry."""

    model_config = ConfigDict(frozen=True)

    status: SessionStatus
    user: Optional[User] = None

    @model_validator(mode="after")
    def _user_matches_status(self) -> "SessionState":
        if (self.status is SessionStatus.AUTHENTICATED) != (self.user is not None):
            raise ValueError("user must be present exactly when authenticated")
        return self

    @classmethod
    def unknown(cls) -> "SessionState":
        return cls(status=SessionStatus.UNKNOWN)

    @classmethod
    def anonymous(cls) -> "SessionState":
        return cls(status=SessionStatus.ANONYMOUS)

    @classmethod
    def authenticated(cls, user: User) -> "SessionState":
        return cls(status=SessionStatus.AUTHENTICATED, user=user)

    @property
    def is_unknown(self) -> bool:
        return self.status is SessionStatus.UNKNOWN

    @property
    def is_anonymous(self) -> bool:
        return self.status is SessionStatus.ANONYMOUS

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED


class Language(str, Enum):
    """Supported UI languages; ``EN`` is the primary one."""

    EN = "en"
    AR = "ar"


class Direction(str, Enum):
    LTR = "ltr"
    RTL = "rtl"


def direction_for(language: Language) -> Direction:
    """Map a language to its text direction."""

    return Direction.RTL if language is Language.AR else Direction.LTR


class LocaleState(BaseModel):
    """Active language together with its derived direction."""

    model_config = ConfigDict(frozen=True)

    language: Language
    direction: Direction

    @model_validator(mode="after")
    def _direction_is_derived(self) -> "LocaleState":
        if self.direction is not direction_for(self.language):
            raise ValueError("direction must follow the language")
        return self

    @classmethod
    def for_language(cls, language: Language) -> "LocaleState":
        return cls(language=language, direction=direction_for(language))


__all__ = [
    "Credentials",
    "Direction",
    "Language",
    "LocaleState",
    "SessionState",
    "SessionStatus",
    "User",
    "direction_for",
]
