import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from app.core.exceptions import NotFoundError, ForbiddenError
from app.db.repositories.snippet_repository import SnippetRepository
from app.db.repositories.user_repository import UserRepository
from app.domains.snippets.entities import Snippet
from app.domains.snippets.schemas import SnippetCreate, SnippetUpdate, SnippetShareRequest

logger = logging.getLogger(__name__)

SNIPPET_NOT_FOUND = "Snippet not found"


class SnippetService:
    """Сервис для работы со сниппетами"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.snippet_repository = SnippetRepository(session)
        self.user_repository = UserRepository(session)

    async def find_all(self, caller_id: Optional[uuid.UUID] = None) -> List[Snippet]:
        """Публичные сниппеты плюс собственные сниппеты вызывающего"""
        return await self.snippet_repository.get_visible(caller_id)

    async def find_public(self) -> List[Snippet]:
        """Только публичные сниппеты"""
        return await self.snippet_repository.get_public()

    async def create(self, snippet_data: SnippetCreate, owner_id: uuid.UUID) -> uuid.UUID:
        """Создание сниппета, владельцем становится вызывающий"""
        snippet = Snippet.create_snippet(
            title=snippet_data.title,
            code=snippet_data.code,
            language=snippet_data.language,
            owner_id=owner_id,
            is_public=snippet_data.is_public
        )
        created = await self.snippet_repository.create(snippet)
        logger.info("User %s created snippet %s", owner_id, created.id)
        return created.id

    async def find_one(self, snippet_id: uuid.UUID, caller_id: Optional[uuid.UUID] = None) -> Snippet:
        """Получение сниппета с проверкой доступа на чтение"""
        snippet = await self.snippet_repository.get_by_id(snippet_id)
        if snippet is None:
            raise NotFoundError(SNIPPET_NOT_FOUND, resource="Snippet", resource_id=str(snippet_id))

        if not snippet.access.can_read(caller_id):
            raise ForbiddenError(
                "You do not have access to this snippet",
                context={"snippet_id": str(snippet_id), "caller_id": str(caller_id)}
            )
        return snippet

    async def update(
        self,
        snippet_id: uuid.UUID,
        update_data: SnippetUpdate,
        caller_id: uuid.UUID
    ) -> Snippet:
        """Частичное обновление сниппета владельцем"""
        snippet = await self.find_one(snippet_id, caller_id)

        if not snippet.access.can_write(caller_id):
            raise ForbiddenError(
                "You can only update your own snippet",
                context={"snippet_id": str(snippet_id), "caller_id": str(caller_id)}
            )

        if update_data.title is not None:
            snippet.update_title(update_data.title)
        if update_data.code is not None:
            snippet.update_code(update_data.code)
        if update_data.language is not None:
            snippet.update_language(update_data.language)
        if update_data.is_public is not None:
            snippet.set_visibility(update_data.is_public)

        return await self.snippet_repository.update(snippet)

    async def remove(self, snippet_id: uuid.UUID, caller_id: uuid.UUID) -> bool:
        """Удаление сниппета владельцем вместе со всеми записями шаринга"""
        snippet = await self.find_one(snippet_id, caller_id)

        if not snippet.access.can_write(caller_id):
            raise ForbiddenError(
                "You can only delete your own snippet",
                context={"snippet_id": str(snippet_id), "caller_id": str(caller_id)}
            )

        deleted = await self.snippet_repository.delete(snippet_id)
        logger.info("User %s deleted snippet %s", caller_id, snippet_id)
        return deleted

    async def share_snippet(
        self,
        snippet_id: uuid.UUID,
        share_data: SnippetShareRequest,
        caller_id: uuid.UUID
    ) -> List[uuid.UUID]:
        """Замена списка пользователей, с которыми поделились сниппетом"""
        snippet = await self.snippet_repository.get_by_id(snippet_id)
        if snippet is None:
            raise NotFoundError(SNIPPET_NOT_FOUND, resource="Snippet", resource_id=str(snippet_id))

        if not snippet.access.can_write(caller_id):
            raise ForbiddenError(
                "You can only share your own snippet",
                context={"snippet_id": str(snippet_id), "caller_id": str(caller_id)}
            )

        # Все пользователи проверяются до изменения списка доступа
        missing = await self.user_repository.find_missing_ids(share_data.user_ids)
        if missing:
            raise NotFoundError(resource="User", resource_id=str(missing[0]))

        user_ids = await self.snippet_repository.replace_shares(snippet_id, share_data.user_ids)
        logger.info("Snippet %s shared with %d users", snippet_id, len(user_ids))
        return user_ids

    async def find_shared(self, caller_id: uuid.UUID) -> List[Snippet]:
        """Сниппеты, которыми поделились с вызывающим"""
        return await self.snippet_repository.get_shared_with(caller_id)
