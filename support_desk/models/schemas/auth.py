from typing import Annotated

from pydantic import EmailStr, Field, StringConstraints

from support_desk.models.entities import UserRole
from support_desk.models.schemas.base import CamelCaseModel

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 120


class RegisterRequest(CamelCaseModel):
    name: Annotated[
        str,
        StringConstraints(
            strip_whitespace=True,
            min_length=NAME_MIN_LENGTH,
            max_length=NAME_MAX_LENGTH,
        ),
    ]
    email: EmailStr
    password: str = Field(min_length=6)


class LoginRequest(CamelCaseModel):
    email: str
    password: str


class PublicUser(CamelCaseModel):
    """Identity claims carried by a token and returned to clients."""

    id: str
    email: str
    role: UserRole
    name: str


class AuthResponse(CamelCaseModel):
    token: str
    user: PublicUser


class MeResponse(CamelCaseModel):
    user: PublicUser
