# backend/config/logging_config.py
from logging.config import dictConfig
from typing import Optional

from config.settings import get_settings


def setup_logging(level: Optional[str] = None) -> None:
    level = (level or get_settings().log_level).upper()
    if get_settings().debug and level == "INFO":
        level = "DEBUG"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,  # keep uvicorn loggers
            "formatters": {
                "plain": {
                    "format": "%(asctime)s %(levelname)-5s %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                },
            },
            "handlers": {
                "stream": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "plain",
                }
            },
            "root": {
                "level": level,
                "handlers": ["stream"],
            },
            "loggers": {
                "uvicorn": {"level": "INFO", "handlers": [], "propagate": True},
                "uvicorn.error": {"level": "INFO", "handlers": [], "propagate": True},
                "uvicorn.access": {"level": "INFO", "handlers": [], "propagate": True},
                # SQL echo is too noisy for the request log
                "sqlalchemy.engine": {"level": "WARNING"},
            },
        }
    )
