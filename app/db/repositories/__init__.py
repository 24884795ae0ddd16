from app.db.repositories.user_repository import UserRepository
from app.db.repositories.snippet_repository import SnippetRepository

__all__ = [
    "UserRepository",
    "SnippetRepository",
]
