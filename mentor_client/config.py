"""Client settings read from the environment or a ``.env`` file."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from mentor_client.core.models import Language


class Settings(BaseSettings):
    """Deployment settings.

    ``MENTOR_DEFAULT_LANGUAGE`` is the language used when nothing has been
    persisted yet. It defaults to the primary language; setting it to ``ar``
    is an explicit deployment override that makes a cold start RTL.
    """

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        populate_by_name=True,
        extra="ignore",
    )

    api_url: str = Field("http://localhost:5000", alias="MENTOR_API_URL")
    request_timeout: float = Field(10.0, alias="MENTOR_REQUEST_TIMEOUT", gt=0)
    session_stale_seconds: float = Field(300.0, alias="MENTOR_SESSION_STALE_SECONDS", ge=0)
    storage_path: str = Field(".app_state/storage.json", alias="MENTOR_STORAGE_PATH")
    language_key: str = Field("language", alias="MENTOR_LANGUAGE_KEY", min_length=1)
    default_language: Language = Field(Language.EN, alias="MENTOR_DEFAULT_LANGUAGE")


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as exc:
        raise RuntimeError(f"Invalid client configuration: {exc}") from exc
