"""
Account routes: signup, login, logout and the current user.
"""
import logging

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_session_store, get_user_store, session_token
from api.models.requests import CredentialsRequest
from api.models.responses import AccountResponse
from core.config import (
    AUTH_COOKIE_DOMAIN,
    AUTH_COOKIE_NAME,
    AUTH_COOKIE_SECURE,
    MIN_PASSWORD_LENGTH,
)
from core.errors import DuplicateEmailError
from core.security import hash_password, verify_password
from services.storage.user_store import SessionStore, UserStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_session_cookie(response: Response, token: str, max_age: int) -> None:
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=max_age,
        path="/",
        domain=AUTH_COOKIE_DOMAIN,
        secure=AUTH_COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )


def _clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=AUTH_COOKIE_NAME,
        path="/",
        domain=AUTH_COOKIE_DOMAIN,
        secure=AUTH_COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )


@router.post("/signup", response_model=AccountResponse, response_model_exclude_none=True)
def signup(
    request: CredentialsRequest,
    response: Response,
    users: UserStore = Depends(get_user_store),
    sessions: SessionStore = Depends(get_session_store),
):
    """Create an account and log it in."""
    if (
        not request.email or not request.email.strip()
        or request.password is None or len(request.password) < MIN_PASSWORD_LENGTH
    ):
        return AccountResponse(
            ok=False,
            error=f"Invalid email or password too short (min {MIN_PASSWORD_LENGTH}).",
        )

    email = request.email.strip().lower()
    try:
        user = users.create(email, hash_password(request.password))
    except DuplicateEmailError:
        return AccountResponse(ok=False, error="Email already registered.")

    logger.info(f"New account {user.id}")
    _set_session_cookie(response, sessions.create(user.id), sessions.max_age_seconds)
    return AccountResponse(ok=True, id=user.id, email=user.email)


@router.post("/login", response_model=AccountResponse, response_model_exclude_none=True)
def login(
    request: CredentialsRequest,
    response: Response,
    users: UserStore = Depends(get_user_store),
    sessions: SessionStore = Depends(get_session_store),
):
    if request.email is None or request.password is None:
        return AccountResponse(ok=False, error="Email and password required.")

    user = users.find_by_email(request.email.strip().lower())
    if user is None or not verify_password(request.password, user.password_hash):
        return AccountResponse(ok=False, error="Invalid credentials.")

    _set_session_cookie(response, sessions.create(user.id), sessions.max_age_seconds)
    return AccountResponse(ok=True, id=user.id, email=user.email)


@router.post("/logout")
def logout(
    response: Response,
    token: str = Depends(session_token),
    sessions: SessionStore = Depends(get_session_store),
):
    sessions.delete(token)
    _clear_session_cookie(response)
    return {"ok": True}


@router.get("/me", response_model=AccountResponse, response_model_exclude_none=True)
def me(
    token: str = Depends(session_token),
    users: UserStore = Depends(get_user_store),
    sessions: SessionStore = Depends(get_session_store),
):
    """Return the logged-in user, or ok=false."""
    user_id = sessions.resolve(token)
    if user_id is None:
        return AccountResponse(ok=False)
    user = users.find_by_id(user_id)
    if user is None:
        return AccountResponse(ok=False)
    return AccountResponse(ok=True, id=user.id, email=user.email)
