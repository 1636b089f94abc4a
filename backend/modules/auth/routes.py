"""
Auth API endpoints.

Thin HTTP adapter over ICredentialService. Errors raised by the service
are turned into responses by the handlers in api/errors.py.
"""

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_credential_service
from shared.models import AuthenticatedUser

from .interfaces import ICredentialService
from .models import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UserResponse,
    VerifyTokenRequest,
)

router = APIRouter()


@router.post(
    "/signup",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    status_code=201,
)
async def signup(
    request: SignupRequest,
    service: ICredentialService = Depends(get_credential_service),
) -> AuthResponse:
    """Register a new user and return a session token."""
    result = await service.register(request)
    return AuthResponse(message=result.message, token=result.token, user=result.user)


@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True)
async def login(
    request: LoginRequest,
    service: ICredentialService = Depends(get_credential_service),
) -> AuthResponse:
    """Log in with email and password and return a fresh session token."""
    result = await service.authenticate(request)
    return AuthResponse(message=result.message, token=result.token, user=result.user)


@router.get("/me", response_model=UserResponse, response_model_exclude_none=True)
async def me(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ICredentialService = Depends(get_credential_service),
) -> UserResponse:
    """
    Get the current user's profile.

    Requires a bearer token.
    """
    return UserResponse(user=await service.get_current_user(user.id))


@router.post("/verify", response_model=UserResponse, response_model_exclude_none=True)
async def verify(
    request: VerifyTokenRequest,
    service: ICredentialService = Depends(get_credential_service),
) -> UserResponse:
    """Check a token and return the identity it belongs to."""
    return UserResponse(user=await service.verify_token(request.token))
