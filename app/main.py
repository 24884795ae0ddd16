import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.http import health_router, auth_router, users_router, snippets_router
from app.core.config import settings, APP_VERSION
from app.core.db import dispose_engine
from app.core.exceptions import AppError, UnauthorizedError
from app.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    logger.info("SnippetShare API %s starting up", APP_VERSION)

    yield

    await dispose_engine()
    logger.info("Shutdown complete")


app = FastAPI(
    title="SnippetShare",
    description="Бэкенд для хранения сниппетов кода и обмена ими между пользователями",
    version=APP_VERSION,
    lifespan=lifespan
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError):
    """Прикладные ошибки: статус из класса ошибки, сообщение как есть"""
    if exc.status_code >= 500:
        logger.error("%s %s: %s | Context: %s", request.method, request.url.path, exc.message, exc.context)
    else:
        logger.warning("%s %s -> %d: %s | Context: %s",
                       request.method, request.url.path, exc.status_code, exc.message, exc.context)

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_code, "message": exc.message},
        headers=headers,
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    """Непредвиденные ошибки: детали только в логе"""
    logger.error("Unexpected error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
        },
    )


# Подключаем роутеры
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(snippets_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "SnippetShare API",
        "version": APP_VERSION,
        "docs": "/docs",
        "health": "/health"
    }
