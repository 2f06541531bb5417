"""FastAPI application factory for the reference auth boundary."""

from __future__ import annotations

from typing import Iterable, List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mentor_client.api.routes_auth import Account, AccountDirectory, router as auth_router
from mentor_client.core.log import get_logger


_LOGGER = get_logger(__name__)


def create_app(accounts: Optional[Iterable[Account]] = None) -> FastAPI:
    """Construct the auth boundary app serving ``accounts`` from memory."""

    app = FastAPI(title="Mentor Auth Boundary", version="1.0")
    app.state.accounts = AccountDirectory(accounts or ())

    allowed_origins: List[str] = [
        "http://localhost",
        "http://127.0.0.1",
        "http://localhost:5000",
        "http://127.0.0.1:5000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)

    @app.get("/health")
    async def health() -> dict:
        """Simple health check endpoint."""

        return {"status": "ok"}

    _LOGGER.info("Auth boundary app created")
    return app


__all__ = ["create_app"]
