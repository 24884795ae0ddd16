import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from app.core.exceptions import ConflictError, UnauthorizedError
from app.core.security import create_access_token
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User
from app.domains.identity.schemas import UserCreate, UserLogin, UserResponse, AuthResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Сервис регистрации, входа и проверки пользователей"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def register(self, user_data: UserCreate) -> AuthResponse:
        """Регистрация нового пользователя"""
        if await self.user_repository.email_exists(user_data.email):
            raise ConflictError("Email already exists", context={"email": user_data.email})

        user = User.create_user(
            email=user_data.email,
            name=user_data.name,
            password=user_data.password
        )
        user = await self.user_repository.create(user)
        logger.info("Registered user %s", user.id)

        return self._auth_response(user)

    async def login(self, login_data: UserLogin) -> AuthResponse:
        """Вход пользователя и создание JWT токена"""
        user = await self.user_repository.get_by_email(login_data.email)

        # Одинаковый ответ для неизвестного email и неверного пароля
        if user is None or not user.authenticate(login_data.password):
            logger.warning("Failed login attempt for %s", login_data.email)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        return self._auth_response(user)

    def get_profile(self, user: User) -> UserResponse:
        """Профиль пользователя без хеша пароля"""
        return UserResponse.model_validate(user)

    async def validate_user(self, user_id: uuid.UUID) -> Optional[User]:
        """Поиск пользователя по id для проверки токена; None если не найден"""
        return await self.user_repository.get_by_id(user_id)

    def _auth_response(self, user: User) -> AuthResponse:
        token = create_access_token(data={"sub": str(user.id), "email": user.email})
        return AuthResponse(user=self.get_profile(user), access_token=token)


class UserService:
    """Каталог пользователей"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def find_all(self) -> List[User]:
        """Все пользователи в сохраненном виде (с хешем пароля)"""
        return await self.user_repository.get_all()
