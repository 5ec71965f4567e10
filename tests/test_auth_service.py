import pytest
from fastapi import status
from jose import jwt
from support_desk.core.config import Settings
from support_desk.core.errors import AppError
from support_desk.models.schemas.auth import RegisterRequest
from support_desk.services.auth_service import AuthService
from tests.helpers.fakes import FakeUserRepository


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret="test-secret", jwt_expires_minutes=5)


@pytest.fixture
def user_repository() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def auth_service(user_repository: FakeUserRepository, settings: Settings) -> AuthService:
    return AuthService(user_repository=user_repository, settings=settings)


def _register(service: AuthService, email: str = "ada@example.com"):
    return service.register(
        RegisterRequest(name="Ada Lovelace", email=email, password="s3cret-pass")
    )


def test_register_hashes_password_and_returns_token(
    auth_service: AuthService, user_repository: FakeUserRepository
) -> None:
    result = _register(auth_service)

    stored = user_repository.find_by_email("ada@example.com")
    assert stored is not None
    assert stored.password_hash != "s3cret-pass"
    assert stored.role == "user"

    assert result.user.id == str(stored.id)
    assert result.user.email == "ada@example.com"
    assert result.user.name == "Ada Lovelace"
    assert result.user.role == "user"
    assert auth_service.verify_token(result.token) == result.user


def test_register_duplicate_email_fails(auth_service: AuthService) -> None:
    _register(auth_service)

    with pytest.raises(AppError) as exc:
        _register(auth_service, email="ADA@example.com")
    assert exc.value.status_code == status.HTTP_400_BAD_REQUEST
    assert exc.value.code == "USER_ALREADY_EXISTS"
    assert exc.value.message == "User already exists"


def test_login_with_correct_credentials_returns_valid_token(auth_service: AuthService) -> None:
    registered = _register(auth_service)

    result = auth_service.login("  Ada@Example.com ", "s3cret-pass")

    claims = auth_service.verify_token(result.token)
    assert claims.id == registered.user.id
    assert claims.email == "ada@example.com"


def test_login_with_wrong_password_fails(auth_service: AuthService) -> None:
    _register(auth_service)

    with pytest.raises(AppError) as exc:
        auth_service.login("ada@example.com", "wrong-pass")
    assert exc.value.status_code == status.HTTP_401_UNAUTHORIZED
    assert exc.value.code == "INVALID_CREDENTIALS"


def test_login_with_unknown_email_fails_the_same_way(auth_service: AuthService) -> None:
    with pytest.raises(AppError) as exc:
        auth_service.login("nobody@example.com", "whatever")
    assert exc.value.code == "INVALID_CREDENTIALS"
    assert exc.value.message == "Invalid credentials"


def test_token_carries_identity_claims(auth_service: AuthService, settings: Settings) -> None:
    result = _register(auth_service)

    claims = jwt.decode(result.token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])

    assert claims["sub"] == result.user.id
    assert claims["id"] == result.user.id
    assert claims["role"] == "user"
    assert claims["name"] == "Ada Lovelace"
    assert claims["exp"] > claims["iat"]


def test_verify_token_rejects_tampered_and_foreign_tokens(auth_service: AuthService) -> None:
    result = _register(auth_service)
    foreign = jwt.encode({"id": "x", "email": "e", "role": "user", "name": "n"}, "other-secret")

    for token in (result.token + "x", "not.a.token", foreign):
        with pytest.raises(AppError) as exc:
            auth_service.verify_token(token)
        assert exc.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert exc.value.code == "INVALID_TOKEN"


def test_verify_token_rejects_expired_token(user_repository: FakeUserRepository) -> None:
    expired_service = AuthService(
        user_repository=user_repository,
        settings=Settings(jwt_secret="test-secret", jwt_expires_minutes=-1),
    )
    result = _register(expired_service)

    with pytest.raises(AppError) as exc:
        expired_service.verify_token(result.token)
    assert exc.value.code == "INVALID_TOKEN"


def test_verify_token_rejects_token_missing_claims(
    auth_service: AuthService, settings: Settings
) -> None:
    token = jwt.encode({"sub": "only-subject"}, settings.jwt_secret, algorithm="HS256")

    with pytest.raises(AppError) as exc:
        auth_service.verify_token(token)
    assert exc.value.code == "INVALID_TOKEN"
