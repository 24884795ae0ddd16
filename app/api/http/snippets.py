from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List
import uuid

from app.core.auth import get_current_user, get_optional_user
from app.core.db import get_db
from app.domains.identity.entities import User
from app.domains.snippets.schemas import (
    SnippetCreate, SnippetUpdate, SnippetResponse, SnippetCreatedResponse,
    SnippetDeleteResponse, SnippetShareRequest, SnippetShareResponse
)
from app.domains.snippets.services import SnippetService

router = APIRouter(prefix="/snippets", tags=["snippets"])


def _caller_id(user: Optional[User]) -> Optional[uuid.UUID]:
    return user.id if user else None


@router.get("/", response_model=List[SnippetResponse])
async def get_snippets(
    current_user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db)
):
    """Публичные сниппеты и собственные сниппеты пользователя"""
    snippets = await SnippetService(db).find_all(_caller_id(current_user))
    return [SnippetResponse.model_validate(s) for s in snippets]


@router.get("/public", response_model=List[SnippetResponse])
async def get_public_snippets(db: AsyncSession = Depends(get_db)):
    """Только публичные сниппеты"""
    snippets = await SnippetService(db).find_public()
    return [SnippetResponse.model_validate(s) for s in snippets]


@router.get("/shared", response_model=List[SnippetResponse])
async def get_shared_snippets(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Сниппеты, которыми поделились с текущим пользователем"""
    snippets = await SnippetService(db).find_shared(current_user.id)
    return [SnippetResponse.model_validate(s) for s in snippets]


@router.post("/", response_model=SnippetCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_snippet(
    snippet_data: SnippetCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового сниппета"""
    snippet_id = await SnippetService(db).create(snippet_data, current_user.id)
    return SnippetCreatedResponse(id=snippet_id)


@router.get("/{snippet_id}", response_model=SnippetResponse)
async def get_snippet(
    snippet_id: uuid.UUID,
    current_user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение сниппета по id"""
    snippet = await SnippetService(db).find_one(snippet_id, _caller_id(current_user))
    return SnippetResponse.model_validate(snippet)


@router.patch("/{snippet_id}", response_model=SnippetResponse)
async def update_snippet(
    snippet_id: uuid.UUID,
    update_data: SnippetUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Частичное обновление сниппета"""
    snippet = await SnippetService(db).update(snippet_id, update_data, current_user.id)
    return SnippetResponse.model_validate(snippet)


@router.delete("/{snippet_id}", response_model=SnippetDeleteResponse)
async def delete_snippet(
    snippet_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Удаление сниппета"""
    deleted = await SnippetService(db).remove(snippet_id, current_user.id)
    return SnippetDeleteResponse(deleted=deleted)


@router.post("/{snippet_id}/share", response_model=SnippetShareResponse)
async def share_snippet(
    snippet_id: uuid.UUID,
    share_data: SnippetShareRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Замена списка пользователей с доступом к сниппету"""
    user_ids = await SnippetService(db).share_snippet(snippet_id, share_data, current_user.id)
    return SnippetShareResponse(snippet_id=snippet_id, user_ids=user_ids)
