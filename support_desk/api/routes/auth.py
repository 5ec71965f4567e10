from typing import Annotated

from fastapi import APIRouter, Depends, status

from support_desk.api.auth import CurrentUser, get_auth_service
from support_desk.models.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest
from support_desk.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    return auth_service.register(payload)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    return auth_service.login(payload.email, payload.password)


@router.get("/me", response_model=MeResponse)
def me(user: CurrentUser) -> MeResponse:
    return MeResponse(user=user)
