import logging
import sys
from functools import lru_cache

from app.core.config import LOG_LEVEL


@lru_cache(maxsize=1)
def configure_logging() -> None:
    """Configura el logging de la aplicación una sola vez.

    Consola con timestamp y nombre del módulo, nivel tomado de LOG_LEVEL
    y WARNING para las librerías ruidosas.
    """
    log_level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger("app").setLevel(log_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
