from app.domains.snippets.entities import Snippet, SnippetAccess
from app.domains.snippets.schemas import (
    SnippetBase, SnippetCreate, SnippetUpdate, SnippetResponse,
    SnippetCreatedResponse, SnippetDeleteResponse,
    SnippetShareRequest, SnippetShareResponse
)

__all__ = [
    "Snippet", "SnippetAccess",
    "SnippetBase", "SnippetCreate", "SnippetUpdate", "SnippetResponse",
    "SnippetCreatedResponse", "SnippetDeleteResponse",
    "SnippetShareRequest", "SnippetShareResponse",
]
