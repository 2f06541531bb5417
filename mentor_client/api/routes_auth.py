"""Cookie-session auth routes for the reference boundary."""

from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import bcrypt
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import BaseModel, Field

from mentor_client.core.log import get_logger
from mentor_client.core.models import User


_LOGGER = get_logger(__name__)

SESSION_COOKIE = "sid"

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    """Credentials posted by the client."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


@dataclass
class Account:
    user: User
    password_hash: bytes

    @classmethod
    def create(cls, user: User, password: str, *, rounds: int = 12) -> "Account":
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
        return cls(user=user, password_hash=hashed)

    def check_password(self, password: str) -> bool:
        return bcrypt.checkpw(password.encode("utf-8"), self.password_hash)


class AccountDirectory:
    """In-memory accounts and cookie sessions."""

    def __init__(self, accounts: Iterable[Account] = ()) -> None:
        self._lock = threading.RLock()
        self._accounts: Dict[str, Account] = {}
        self._sessions: Dict[str, str] = {}
        for account in accounts:
            self.add(account)

    def add(self, account: Account) -> None:
        with self._lock:
            self._accounts[account.user.email.lower()] = account

    def authenticate(self, email: str, password: str) -> Optional[User]:
        with self._lock:
            account = self._accounts.get(email.strip().lower())
        if account is None or not account.check_password(password):
            return None
        return account.user

    def open_session(self, user: User) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._sessions[token] = user.email.lower()
        return token

    def resolve(self, token: Optional[str]) -> Optional[User]:
        if not token:
            return None
        with self._lock:
            email = self._sessions.get(token)
            account = self._accounts.get(email) if email else None
        return account.user if account else None

    def close_session(self, token: Optional[str]) -> None:
        if token:
            with self._lock:
                self._sessions.pop(token, None)


def get_directory(request: Request) -> AccountDirectory:
    """Retrieve the shared account directory from FastAPI state."""

    return request.app.state.accounts


@router.get("/me")
async def me(request: Request, accounts: AccountDirectory = Depends(get_directory)) -> dict:
    user = accounts.resolve(request.cookies.get(SESSION_COOKIE))
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user.model_dump()


@router.post("/login")
async def login(
    payload: LoginRequest,
    response: Response,
    accounts: AccountDirectory = Depends(get_directory),
) -> dict:
    user = accounts.authenticate(payload.email, payload.password)
    if user is None:
        _LOGGER.info("Rejected login for %s", payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    token = accounts.open_session(user)
    response.set_cookie(SESSION_COOKIE, token, httponly=True, samesite="lax")
    _LOGGER.info("Opened session for %s", user.id)
    return user.model_dump()


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request, accounts: AccountDirectory = Depends(get_directory)) -> Response:
    accounts.close_session(request.cookies.get(SESSION_COOKIE))
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(SESSION_COOKIE)
    return response


__all__ = ["Account", "AccountDirectory", "LoginRequest", "SESSION_COOKIE", "router"]
