from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List
import uuid
from datetime import datetime

from app.domains.identity.schemas import UserResponse


class SnippetBase(BaseModel):
    """Базовая схема сниппета"""
    title: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., max_length=100000)
    language: str = Field(..., min_length=1, max_length=50)
    is_public: bool = False

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()


class SnippetCreate(SnippetBase):
    """Схема для создания сниппета"""
    pass


class SnippetUpdate(BaseModel):
    """Частичное обновление: применяются только переданные поля"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    code: Optional[str] = Field(None, max_length=100000)
    language: Optional[str] = Field(None, min_length=1, max_length=50)
    is_public: Optional[bool] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip() if v else v


class SnippetResponse(SnippetBase):
    """Схема для ответа с данными сниппета"""
    id: uuid.UUID
    owner: UserResponse
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SnippetCreatedResponse(BaseModel):
    """Создание возвращает только идентификатор"""
    id: uuid.UUID


class SnippetDeleteResponse(BaseModel):
    deleted: bool


class SnippetShareRequest(BaseModel):
    """Новый полный список пользователей, с которыми делимся сниппетом"""
    user_ids: List[uuid.UUID]


class SnippetShareResponse(BaseModel):
    snippet_id: uuid.UUID
    user_ids: List[uuid.UUID]
