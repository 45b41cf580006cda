import json
import logging
from datetime import datetime, timezone
from typing import Optional

from nexgen.config import Settings, get_settings

# Every module logs through logging.getLogger(__name__), so this is the parent of all of them.
PACKAGE_LOGGER = "nexgen"

# Attributes a plain LogRecord always carries; anything else came in through ``extra=``.
_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line, tagged with the app and environment."""

    def __init__(self, app_name: str, environment: str):
        super().__init__()
        self.app_name = app_name
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "app": self.app_name,
            "environment": self.environment,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_FIELDS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def build_handler(settings: Settings) -> logging.Handler:
    handler = logging.StreamHandler()
    if settings.LOG_JSON:
        handler.setFormatter(JsonFormatter(settings.APP_NAME, settings.ENVIRONMENT))
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s [" + settings.ENVIRONMENT + "] %(name)s - %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
    return handler


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Attach a single handler to the ``nexgen`` logger tree and return it.

    Calling it again replaces the handler instead of stacking another one.
    Third-party loggers (uvicorn, sqlalchemy) are left as they are.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(build_handler(settings))
    logger.propagate = False
    return logger


__all__ = ["JsonFormatter", "PACKAGE_LOGGER", "build_handler", "setup_logging"]
