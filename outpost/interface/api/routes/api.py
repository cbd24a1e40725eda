"""Player-facing API routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status
from fastapi.responses import JSONResponse

from outpost.application.usecase.auth import (
    GetCurrentIdentityRequest,
    GetCurrentIdentityResponse,
    GetCurrentIdentityUseCase,
)
from outpost.application.usecase.server import ListServersUseCase, ServerItem
from outpost.config import Settings
from outpost.domain.error import SessionIdentityNotFoundError
from outpost.interface.api.cookies import clear_session_cookie
from outpost.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"], route_class=DishkaRoute)


@router.get("/user", response_model=GetCurrentIdentityResponse)
async def get_current_identity(
    use_case: FromDishka[GetCurrentIdentityUseCase],
    settings: FromDishka[Settings],
    session_token: str | None = Cookie(default=None),
):
    """Return the identity behind the session cookie.

    Example response:
        {
            "id": "5f0c...",
            "steamId": "76561197960287930",
            "steamName": "survivor",
            "isFullyAuthenticated": true
        }
    """
    if not session_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )

    try:
        return await use_case.execute(GetCurrentIdentityRequest(token=session_token))
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )
    except SessionIdentityNotFoundError as e:
        # Valid session for a deleted identity: drop the stale cookie
        logger.warning(f"Session refers to missing identity {e.identifier}")
        response = JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Session identity no longer exists"},
        )
        clear_session_cookie(response, settings)
        return response


@router.get("/servers", response_model=list[ServerItem])
async def list_servers(use_case: FromDishka[ListServersUseCase]) -> list[ServerItem]:
    """List active game servers; empty when status data is unavailable."""
    return await use_case.execute()
