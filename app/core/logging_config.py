import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Настройка корневого логгера (один раз за процесс)"""
    root = logging.getLogger()
    if root.handlers:
        # uvicorn или pytest уже настроили логирование
        root.setLevel(getattr(logging, level.upper(), logging.INFO))
        return

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Сторонние библиотеки слишком шумные на INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
