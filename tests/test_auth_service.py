import uuid

import pytest
from jose import jwt

from app.core.config import settings
from app.core.exceptions import ConflictError, UnauthorizedError
from app.core.security import verify_token
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.schemas import UserCreate, UserLogin
from app.domains.identity.services import AuthService


def registration(email="x@example.com", name="N"):
    return UserCreate(email=email, password="password1", name=name)


@pytest.mark.asyncio
async def test_register_returns_profile_and_token(db_session):
    response = await AuthService(db_session).register(registration())

    assert response.user.email == "x@example.com"
    assert response.user.name == "N"
    assert response.token_type == "bearer"
    assert not hasattr(response.user, "password_hash")

    payload = verify_token(response.access_token)
    assert payload["sub"] == str(response.user.id)
    assert payload["email"] == "x@example.com"
    assert "exp" in payload


@pytest.mark.asyncio
async def test_register_stores_hash_not_password(db_session):
    response = await AuthService(db_session).register(registration())

    user = await UserRepository(db_session).get_by_id(response.user.id)
    assert user.password_hash != "password1"
    assert user.authenticate("password1")


@pytest.mark.asyncio
async def test_register_duplicate_email_is_conflict(db_session):
    service = AuthService(db_session)
    await service.register(registration())

    with pytest.raises(ConflictError) as exc_info:
        await service.register(registration(name="Other"))

    assert exc_info.value.message == "Email already exists"
    users = await UserRepository(db_session).get_all()
    assert len(users) == 1


@pytest.mark.asyncio
async def test_login_success(db_session, make_user):
    user = await make_user(email="login@example.com")

    response = await AuthService(db_session).login(
        UserLogin(email="login@example.com", password="secret123")
    )

    assert response.user.id == user.id
    payload = jwt.decode(response.access_token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    assert payload["sub"] == str(user.id)


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(db_session, make_user):
    await make_user(email="known@example.com")
    service = AuthService(db_session)

    with pytest.raises(UnauthorizedError) as wrong_password:
        await service.login(UserLogin(email="known@example.com", password="wrong-password"))
    with pytest.raises(UnauthorizedError) as unknown_email:
        await service.login(UserLogin(email="nobody@example.com", password="secret123"))

    assert wrong_password.value.message == "Invalid credentials"
    assert wrong_password.value.message == unknown_email.value.message


@pytest.mark.asyncio
async def test_validate_user(db_session, make_user):
    user = await make_user()
    service = AuthService(db_session)

    assert await service.validate_user(user.id) == user
    assert await service.validate_user(uuid.uuid4()) is None


@pytest.mark.asyncio
async def test_get_profile_has_no_hash(db_session, make_user):
    user = await make_user()

    profile = AuthService(db_session).get_profile(user)

    assert profile.id == user.id
    assert "password_hash" not in profile.model_dump()
