"""
Иерархия прикладных ошибок.

Сервисы выбрасывают эти исключения напрямую, а обработчики из ``app.main``
превращают их в HTTP-ответы:

    AppError
    ├── NotFoundError      -> 404
    ├── ForbiddenError     -> 403
    ├── UnauthorizedError  -> 401
    └── ConflictError      -> 409

``message`` возвращается клиенту как есть, ``context`` только пишется в лог.
"""

from typing import Any, Dict, Optional


class AppError(Exception):
    """Базовая ошибка приложения"""

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(AppError):
    """Сущность не существует"""

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        message: Optional[str] = None,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ForbiddenError(AppError):
    """Сущность существует, но у вызывающего нет прав"""

    status_code = 403
    error_code = "forbidden"


class UnauthorizedError(AppError):
    """Проверка учетных данных не пройдена"""

    status_code = 401
    error_code = "unauthorized"


class ConflictError(AppError):
    """Нарушение уникальности"""

    status_code = 409
    error_code = "conflict"
