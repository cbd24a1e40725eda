"""Session cookie helpers shared by the auth and API routes."""

from fastapi import Response

from outpost.config import Settings

SESSION_COOKIE = "session_token"


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session token as an HTTP-only cookie."""
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        secure=settings.environment == "production",
        samesite="lax",
        path="/",
        max_age=settings.auth.session_expiry_days * 24 * 60 * 60,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Remove the session cookie (same path and flags as when it was set)."""
    response.delete_cookie(
        key=SESSION_COOKIE,
        path="/",
        secure=settings.environment == "production",
        httponly=True,
        samesite="lax",
    )
