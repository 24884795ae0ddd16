import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import APP_VERSION
from app.core.db import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Проверка состояния сервиса и подключения к БД"""
    database = "connected"
    status = "healthy"

    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        database = "disconnected"
        status = "unhealthy"
        logger.warning("Health check: database unreachable: %s", e)

    return {"status": status, "version": APP_VERSION, "database": database}
