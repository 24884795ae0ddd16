from typing import Optional, List, Sequence, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, or_
from sqlalchemy.orm import selectinload
import uuid

from app.db.models.snippet import Snippet as SnippetModel, SnippetShare as SnippetShareModel
from app.db.repositories.user_repository import UserRepository

if TYPE_CHECKING:
    from app.domains.snippets.entities import Snippet


class SnippetRepository:
    """Репозиторий для работы со сниппетами и их шарингом"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _select(self):
        # populate_existing: связи перечитываются даже для объектов, уже загруженных в сессию
        return select(SnippetModel).options(
            selectinload(SnippetModel.owner),
            selectinload(SnippetModel.shares),
        ).execution_options(populate_existing=True)

    async def create(self, snippet: "Snippet") -> "Snippet":
        """Создание нового сниппета"""
        db_snippet = SnippetModel(
            id=snippet.id,
            title=snippet.title,
            code=snippet.code,
            language=snippet.language,
            is_public=snippet.is_public,
            owner_id=snippet.owner_id,
            created_at=snippet.created_at,
            updated_at=snippet.updated_at
        )

        self.session.add(db_snippet)
        await self.session.commit()
        return await self.get_by_id(snippet.id)

    async def get_by_id(self, snippet_id: uuid.UUID) -> Optional["Snippet"]:
        """Получение сниппета вместе с владельцем и списком доступа"""
        result = await self.session.execute(
            self._select()
            .where(SnippetModel.id == snippet_id)
        )
        db_snippet = result.scalar_one_or_none()
        return self._to_domain(db_snippet) if db_snippet else None

    async def get_visible(self, user_id: Optional[uuid.UUID] = None) -> List["Snippet"]:
        """Публичные сниппеты плюс собственные сниппеты пользователя"""
        query = self._select()
        if user_id is not None:
            query = query.where(or_(SnippetModel.is_public.is_(True), SnippetModel.owner_id == user_id))
        else:
            query = query.where(SnippetModel.is_public.is_(True))

        result = await self.session.execute(query.order_by(SnippetModel.created_at.desc()))
        return [self._to_domain(s) for s in result.scalars().all()]

    async def get_public(self) -> List["Snippet"]:
        """Только публичные сниппеты"""
        return await self.get_visible(None)

    async def get_shared_with(self, user_id: uuid.UUID) -> List["Snippet"]:
        """Сниппеты, которыми поделились с пользователем"""
        result = await self.session.execute(
            self._select()
            .join(SnippetShareModel, SnippetShareModel.snippet_id == SnippetModel.id)
            .where(SnippetShareModel.user_id == user_id)
            .order_by(SnippetModel.created_at.desc())
        )
        return [self._to_domain(s) for s in result.scalars().unique().all()]

    async def update(self, snippet: "Snippet") -> "Snippet":
        """Обновление полей сниппета (владелец не меняется)"""
        result = await self.session.execute(
            select(SnippetModel).where(SnippetModel.id == snippet.id)
        )
        db_snippet = result.scalar_one()
        db_snippet.title = snippet.title
        db_snippet.code = snippet.code
        db_snippet.language = snippet.language
        db_snippet.is_public = snippet.is_public
        db_snippet.updated_at = snippet.updated_at

        await self.session.commit()
        return await self.get_by_id(snippet.id)

    async def delete(self, snippet_id: uuid.UUID) -> bool:
        """Удаление сниппета вместе со всеми записями шаринга"""
        try:
            await self.session.execute(
                delete(SnippetShareModel).where(SnippetShareModel.snippet_id == snippet_id)
            )
            result = await self.session.execute(
                delete(SnippetModel).where(SnippetModel.id == snippet_id)
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return result.rowcount > 0

    async def replace_shares(self, snippet_id: uuid.UUID, user_ids: Sequence[uuid.UUID]) -> List[uuid.UUID]:
        """Полная замена списка доступа в одной транзакции"""
        unique_ids = list(dict.fromkeys(user_ids))
        try:
            await self.session.execute(
                delete(SnippetShareModel).where(SnippetShareModel.snippet_id == snippet_id)
            )
            for user_id in unique_ids:
                self.session.add(SnippetShareModel(snippet_id=snippet_id, user_id=user_id))
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return unique_ids

    def _to_domain(self, db_snippet: SnippetModel) -> "Snippet":
        """Преобразование модели БД в доменную сущность"""
        from app.domains.snippets.entities import Snippet

        owner = UserRepository(self.session)._to_domain(db_snippet.owner) if db_snippet.owner else None
        return Snippet(
            id=db_snippet.id,
            title=db_snippet.title,
            code=db_snippet.code,
            language=db_snippet.language,
            is_public=db_snippet.is_public,
            owner_id=db_snippet.owner_id,
            owner=owner,
            shared_with=[share.user_id for share in db_snippet.shares],
            created_at=db_snippet.created_at,
            updated_at=db_snippet.updated_at
        )
