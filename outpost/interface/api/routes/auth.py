"""Authentication routes (Steam OpenID and Discord OAuth)."""

import logging
import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from outpost.adapter.error import ProviderError
from outpost.application.usecase.auth import LoginRequest, LoginUseCase
from outpost.config import Settings
from outpost.domain.error import LinkConflictError, PersistenceError
from outpost.domain.service import AuthService
from outpost.domain.value import AuthProvider
from outpost.interface.api.cookies import clear_session_cookie, set_session_cookie

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


async def _start_login(provider: AuthProvider, auth_service: AuthService):
    # Nonce checked by the provider client when the callback arrives
    state = secrets.token_urlsafe(32)
    logger.info(f"Initiating {provider.value} login")
    auth_url = await auth_service.initiate_login(provider, state)
    return RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)


@router.get("/steam")
async def steam_login(auth_service: FromDishka[AuthService]):
    """Redirect the browser to Steam's OpenID login page."""
    return await _start_login(AuthProvider.STEAM, auth_service)


@router.get("/steam/return")
async def steam_return(
    request: Request,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
):
    """Handle the Steam OpenID callback.

    Steam sends the signed assertion as ``openid.*`` query parameters,
    which are passed through unchanged for verification.
    """
    return await _handle_callback(
        AuthProvider.STEAM, request, login_use_case, settings
    )


@router.get("/discord")
async def discord_login(auth_service: FromDishka[AuthService]):
    """Redirect the browser to Discord's OAuth2 authorize page."""
    return await _start_login(AuthProvider.DISCORD, auth_service)


@router.get("/discord/callback")
async def discord_callback(
    request: Request,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
):
    """Handle the Discord OAuth2 callback (``code`` and ``state``, or ``error``)."""
    return await _handle_callback(
        AuthProvider.DISCORD, request, login_use_case, settings
    )


def _error_redirect(settings: Settings, code: str) -> RedirectResponse:
    return RedirectResponse(
        url=f"{settings.api.frontend_url}/auth/error?error={code}",
        status_code=status.HTTP_302_FOUND,
    )


async def _handle_callback(
    provider: AuthProvider,
    request: Request,
    login_use_case: LoginUseCase,
    settings: Settings,
):
    """Shared callback handler for both providers.

    On success the session cookie is set on a redirect to the frontend.
    Failures redirect to the frontend error page with a short code.
    """
    logger.info(f"Login callback received: provider={provider.value}")

    try:
        login_response = await login_use_case.execute(
            LoginRequest(provider=provider, params=dict(request.query_params))
        )
    except ProviderError as e:
        logger.warning(f"{provider.value} login rejected: {e}")
        return _error_redirect(settings, "auth_failed")
    except LinkConflictError as e:
        logger.warning(f"{provider.value} login hit a link conflict: {e}")
        return _error_redirect(settings, "link_conflict")
    except PersistenceError as e:
        logger.error(f"Storage failure during {provider.value} login: {e}")
        return _error_redirect(settings, "storage_unavailable")
    except Exception as e:
        logger.exception(f"Unexpected error during {provider.value} login: {e}")
        return _error_redirect(settings, "unexpected")

    logger.info(
        f"Login successful: identity={login_response.identity_id}, "
        f"action={login_response.action.value}, "
        f"fully_authenticated={login_response.is_fully_authenticated}"
    )

    # Cookies must go on the returned response object
    redirect_response = RedirectResponse(
        url=settings.api.frontend_url, status_code=status.HTTP_302_FOUND
    )
    set_session_cookie(redirect_response, login_response.token, settings)
    return redirect_response


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response, settings: FromDishka[Settings]) -> LogoutResponse:
    """Log out by clearing the session cookie."""
    clear_session_cookie(response, settings)
    return LogoutResponse(success=True, message="Successfully logged out")
