"""Authentication use cases."""

from .get_current_identity import (
    GetCurrentIdentityRequest,
    GetCurrentIdentityResponse,
    GetCurrentIdentityUseCase,
)
from .login import LoginRequest, LoginResponse, LoginUseCase

__all__ = [
    "GetCurrentIdentityRequest",
    "GetCurrentIdentityResponse",
    "GetCurrentIdentityUseCase",
    "LoginRequest",
    "LoginResponse",
    "LoginUseCase",
]
