"""Auth cookie helpers.

Token pairs are returned in the body and also set as HTTP-only cookies:
``access_token`` on path ``/`` and ``refresh_token`` only on the token
refresh path, so the refresh token is not sent with every request.
"""

from fastapi import Response

from src.application.dtos import TokenPair
from src.core.config import get_settings
from src.presentation.api.middleware.auth_dependencies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
)


def refresh_cookie_path() -> str:
    return f"{get_settings().api_v1_prefix}/tokens"


def set_auth_cookies(response: Response, tokens: TokenPair) -> None:
    """Attach both tokens as HTTP-only, SameSite=lax cookies."""
    secure = get_settings().is_production
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=tokens.access_token,
        max_age=tokens.expires_in,
        path="/",
        httponly=True,
        secure=secure,
        samesite="lax",
    )
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=tokens.refresh_token,
        expires=tokens.refresh_expires_at,
        path=refresh_cookie_path(),
        httponly=True,
        secure=secure,
        samesite="lax",
    )


def clear_auth_cookies(response: Response) -> None:
    response.delete_cookie(key=ACCESS_TOKEN_COOKIE, path="/")
    response.delete_cookie(key=REFRESH_TOKEN_COOKIE, path=refresh_cookie_path())
