from app.db.models.user import User
from app.db.models.snippet import Snippet, SnippetShare

__all__ = [
    "User",
    "Snippet",
    "SnippetShare",
]
