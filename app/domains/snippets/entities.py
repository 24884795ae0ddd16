import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Set

from app.domains.identity.entities import User


class Snippet:
    """Сущность сниппета домена Snippets"""

    def __init__(
        self,
        id: uuid.UUID,
        title: str,
        code: str,
        language: str,
        owner_id: uuid.UUID,
        is_public: bool = False,
        owner: Optional[User] = None,
        shared_with: Optional[Iterable[uuid.UUID]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.title = title
        self.code = code
        self.language = language
        self.is_public = is_public
        self.owner_id = owner_id
        self.owner = owner
        self.shared_with: Set[uuid.UUID] = set(shared_with or ())
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or self.created_at

    @property
    def access(self) -> "SnippetAccess":
        access = SnippetAccess(self.id, self.owner_id, self.is_public)
        for user_id in self.shared_with:
            access.add_reader(user_id)
        return access

    def update_title(self, new_title: str) -> None:
        self.title = new_title
        self.updated_at = datetime.now(timezone.utc)

    def update_code(self, new_code: str) -> None:
        self.code = new_code
        self.updated_at = datetime.now(timezone.utc)

    def update_language(self, new_language: str) -> None:
        self.language = new_language
        self.updated_at = datetime.now(timezone.utc)

    def set_visibility(self, is_public: bool) -> None:
        self.is_public = is_public
        self.updated_at = datetime.now(timezone.utc)

    @classmethod
    def create_snippet(
        cls,
        title: str,
        code: str,
        language: str,
        owner_id: uuid.UUID,
        is_public: bool = False
    ) -> "Snippet":
        """Создание нового сниппета"""
        return cls(
            id=uuid.uuid4(),
            title=title,
            code=code,
            language=language,
            is_public=is_public,
            owner_id=owner_id
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Snippet):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Snippet(id={self.id}, title={self.title}, is_public={self.is_public})"


class SnippetAccess:
    """Правила доступа к сниппету: чтение и запись"""

    def __init__(self, snippet_id: uuid.UUID, owner_id: uuid.UUID, is_public: bool = False):
        self.snippet_id = snippet_id
        self.owner_id = owner_id
        self.is_public = is_public
        self._readers: Set[uuid.UUID] = set()

    def add_reader(self, user_id: uuid.UUID) -> None:
        """Выдача доступа на чтение"""
        self._readers.add(user_id)

    def remove_reader(self, user_id: uuid.UUID) -> None:
        """Отзыв доступа на чтение"""
        self._readers.discard(user_id)

    def is_owner(self, user_id: Optional[uuid.UUID]) -> bool:
        """Проверка является ли пользователь владельцем"""
        return user_id is not None and user_id == self.owner_id

    def can_read(self, user_id: Optional[uuid.UUID]) -> bool:
        """Публичный сниппет доступен всем, приватный только владельцу и тем, с кем поделились"""
        if self.is_public:
            return True
        if user_id is None:
            return False
        return self.is_owner(user_id) or user_id in self._readers

    def can_write(self, user_id: Optional[uuid.UUID]) -> bool:
        """Изменять, удалять и делиться может только владелец"""
        return self.is_owner(user_id)

    def get_readers(self) -> List[uuid.UUID]:
        return list(self._readers)
