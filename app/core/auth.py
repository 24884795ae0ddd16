from typing import Optional
import uuid

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.exceptions import UnauthorizedError
from app.core.security import verify_token
from app.domains.identity.entities import User
from app.domains.identity.services import AuthService

# auto_error=False: отсутствие заголовка обрабатываем сами, анонимный доступ разрешен на части маршрутов
bearer_scheme = HTTPBearer(auto_error=False)


def _user_id_from_token(token: str) -> Optional[uuid.UUID]:
    payload = verify_token(token)
    if not payload or "sub" not in payload:
        return None
    try:
        return uuid.UUID(str(payload["sub"]))
    except ValueError:
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Зависимость для получения текущего пользователя"""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    user_id = _user_id_from_token(credentials.credentials)
    if user_id is None:
        raise UnauthorizedError("Invalid token")

    user = await AuthService(db).validate_user(user_id)
    if user is None:
        raise UnauthorizedError("User not found", context={"user_id": str(user_id)})

    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """Текущий пользователь или None для анонимного запроса"""
    if credentials is None:
        return None

    user_id = _user_id_from_token(credentials.credentials)
    if user_id is None:
        return None

    return await AuthService(db).validate_user(user_id)
