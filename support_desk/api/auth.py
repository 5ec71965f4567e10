"""Bearer-token guard for protected routes.

``get_current_user`` resolves the caller from the ``Authorization`` header and
stores the decoded identity on ``request.state.user``. Role-gated routes pass
the resolved user through ``ensure_role``, which answers 403 for roles outside
the allowed set; an empty set allows every authenticated caller.
"""

from collections.abc import Iterable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, Request

from support_desk.core.config import Settings, get_settings
from support_desk.core.errors import AppError, forbidden, unauthorized
from support_desk.core.logging import get_logger
from support_desk.models.schemas.auth import PublicUser
from support_desk.repositories.user_repository import UserRepository
from support_desk.services.auth_service import AuthService

BEARER_PREFIX = "Bearer "

logger = get_logger(__name__)


@lru_cache
def get_auth_service() -> AuthService:
    return AuthService(user_repository=UserRepository(), settings=get_settings())


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise unauthorized()
    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise unauthorized()
    return token


def get_current_user(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> PublicUser:
    token = extract_bearer_token(authorization)
    try:
        user = auth_service.verify_token(token)
    except AppError as exc:
        logger.info("Rejected bearer token", extra={"reason": exc.code})
        raise unauthorized() from exc
    request.state.user = user
    return user


def ensure_role(user: PublicUser, roles: Iterable[str]) -> PublicUser:
    allowed = list(roles)
    if allowed and user.role not in allowed:
        logger.info(
            "Role not permitted",
            extra={"user_id": user.id, "role": user.role, "allowed_roles": allowed},
        )
        raise forbidden(details={"required_roles": allowed})
    return user


def require_ticket_delete_role(
    user: Annotated[PublicUser, Depends(get_current_user)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PublicUser:
    return ensure_role(user, settings.ticket_delete_roles_list)


CurrentUser = Annotated[PublicUser, Depends(get_current_user)]
