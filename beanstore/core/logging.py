"""Logging configuration"""

import logging.config

def setup_logging(level: str = "INFO") -> None:
    """Configure a single console handler for the app and its libraries"""
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "beanstore": {"level": level.upper()},
            "uvicorn": {"level": level.upper()},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
    })
