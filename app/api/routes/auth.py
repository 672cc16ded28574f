"""
api/routes/auth.py
------------------
Authentication endpoints.

POST /auth/register  - Create an account and receive a JWT access token.
POST /auth/login     - Exchange email + password (JSON body) for a token.
GET  /auth/me        - Return the authenticated user's profile.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.core.security import ACCESS_TOKEN_EXPIRE_SECONDS, create_access_token
from app.db.session import DbSession
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import Envelope, ok
from app.schemas.user import (
    LoginRequest,
    TokenClaims,
    TokenResponse,
    UserRead,
    UserRegister,
)
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id, user.email),
        expires_in=ACCESS_TOKEN_EXPIRE_SECONDS,
        user=UserRead.model_validate(user),
    )


@router.post(
    "/register",
    response_model=Envelope[TokenResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def register(
    body: UserRegister,
    db: DbSession,
) -> Envelope:
    """Returns 409 if the email (case-insensitive) is already registered."""
    user = await UserService.register(db, body)
    return ok(_token_response(user))


@router.post(
    "/login",
    response_model=Envelope[TokenResponse],
    summary="Login and receive a JWT access token",
)
async def login(
    body: LoginRequest,
    db: DbSession,
) -> Envelope:
    user = await UserService.authenticate(db, body.email, body.password)
    return ok(_token_response(user))


@router.get(
    "/me",
    response_model=Envelope[UserRead],
    summary="Get the currently authenticated user",
)
async def get_me(
    db: DbSession,
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
) -> Envelope:
    user = await UserService.get_by_id(db, current_user.user_id)
    return ok(UserRead.model_validate(user))
