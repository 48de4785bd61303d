"""Logging configuration."""

import logging.config


def get_logging_config(level: str = "INFO", fmt: str = "text") -> dict:
    """Build a dictConfig for the application.

    ``fmt="json"`` emits one JSON object per line for log shippers.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "text": {
                "format": "[{asctime}] [{levelname}] {name}: {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if fmt == "json" else "text",
            },
        },
        "root": {"handlers": ["console"], "level": level.upper()},
        "loggers": {
            "uvicorn.access": {"level": "WARNING"},
        },
    }


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    logging.config.dictConfig(get_logging_config(level, fmt))
