from datetime import timedelta
from typing import NoReturn

from fastapi import status
from jose import JWTError
from psycopg.errors import UniqueViolation
from pydantic import ValidationError

from support_desk.core.config import Settings
from support_desk.core.errors import AppError
from support_desk.core.logging import get_logger
from support_desk.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from support_desk.models.entities import UserEntity
from support_desk.models.schemas.auth import AuthResponse, PublicUser, RegisterRequest
from support_desk.repositories.user_repository import UserRepository

logger = get_logger(__name__)


class AuthService:
    """Registers users, checks credentials and issues/verifies bearer tokens."""

    def __init__(self, user_repository: UserRepository, settings: Settings) -> None:
        self.user_repository = user_repository
        self.settings = settings

    def register(self, payload: RegisterRequest) -> AuthResponse:
        email = self._normalize_email(payload.email)
        if self.user_repository.find_by_email(email) is not None:
            self._raise_user_exists(email)

        try:
            user = self.user_repository.create(
                email=email,
                name=payload.name,
                password_hash=hash_password(payload.password),
            )
        except UniqueViolation as exc:
            self._raise_user_exists(email, exc=exc)

        logger.info("User registered", extra={"user_id": str(user.id), "role": user.role})
        return self._issue_token(user)

    def login(self, email: str, password: str) -> AuthResponse:
        user = self.user_repository.find_by_email(self._normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login rejected", extra={"reason": "invalid_credentials"})
            raise AppError(
                status_code=status.HTTP_401_UNAUTHORIZED,
                code="INVALID_CREDENTIALS",
                message="Invalid credentials",
            )

        logger.info("User logged in", extra={"user_id": str(user.id)})
        return self._issue_token(user)

    def verify_token(self, token: str) -> PublicUser:
        try:
            claims = decode_access_token(
                token,
                secret=self.settings.jwt_secret,
                algorithm=self.settings.jwt_algorithm,
            )
            return PublicUser.model_validate(claims)
        except (JWTError, ValidationError) as exc:
            raise AppError(
                status_code=status.HTTP_401_UNAUTHORIZED,
                code="INVALID_TOKEN",
                message="Invalid or expired token",
            ) from exc

    def _issue_token(self, user: UserEntity) -> AuthResponse:
        public_user = PublicUser(
            id=str(user.id),
            email=user.email,
            role=user.role,
            name=user.name,
        )
        token = create_access_token(
            {"sub": public_user.id, **public_user.model_dump()},
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            expires_delta=timedelta(minutes=self.settings.jwt_expires_minutes),
        )
        return AuthResponse(token=token, user=public_user)

    def _normalize_email(self, email: str) -> str:
        return email.strip().lower()

    def _raise_user_exists(self, email: str, exc: Exception | None = None) -> NoReturn:
        raise AppError(
            status_code=status.HTTP_400_BAD_REQUEST,
            code="USER_ALREADY_EXISTS",
            message="User already exists",
            details={"email": email},
        ) from exc
