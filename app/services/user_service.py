"""
services/user_service.py
------------------------
Business logic for registration and credential checks.

Emails are compared and stored lower-cased. authenticate() answers an
unknown email and a wrong password with the same error.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, InvalidCredentials, NotFoundError
from app.core.logging import get_logger
from app.core.security import dummy_verify_password, hash_password, verify_password
from app.models.user import User
from app.schemas.user import UserRegister

logger = get_logger(__name__)

_DUPLICATE_EMAIL = "User with this email already exists"


class UserService:

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> User | None:
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: str) -> User:
        user = await db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    async def register(db: AsyncSession, data: UserRegister) -> User:
        """
        Create a new account.
        Raises ConflictError on a duplicate (case-insensitive) email.
        """
        email = data.email.lower()
        if await UserService.get_by_email(db, email) is not None:
            logger.info("Registration rejected: email taken")
            raise ConflictError(_DUPLICATE_EMAIL)

        user = User(
            email=email,
            password_hash=hash_password(data.password),
            full_name=data.full_name or None,
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            await db.rollback()
            raise ConflictError(_DUPLICATE_EMAIL)

        await db.refresh(user)
        logger.info("User registered", user_id=user.id)
        return user

    @staticmethod
    async def authenticate(db: AsyncSession, email: str, password: str) -> User:
        """
        Verify credentials and return the User.
        Raises InvalidCredentials for unknown email or wrong password alike.
        """
        user = await UserService.get_by_email(db, email)
        if user is None:
            # Same bcrypt cost as a wrong password for a known account
            dummy_verify_password()
            logger.info("Login failed")
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            logger.info("Login failed")
            raise InvalidCredentials()
        logger.info("User logged in", user_id=user.id)
        return user
