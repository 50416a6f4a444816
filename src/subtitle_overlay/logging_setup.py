import json
import logging
import sys
from datetime import datetime
from typing import Any, TextIO

from .config import get_settings


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings after parsing the LogRecord.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        # Add extra fields passed via extra={"data": ...}
        if hasattr(record, "data"):
            log_record["data"] = record.data  # type: ignore

        return json.dumps(log_record, ensure_ascii=False, default=str)


PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(
    level: str | None = None,
    json_output: bool | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Configures the root logger with a single stdout handler.

    Falls back to the configured ``log_level`` / ``log_json`` settings when
    arguments are omitted.
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    use_json = settings.log_json if json_output is None else json_output

    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter() if use_json else logging.Formatter(PLAIN_FORMAT))

    # Remove existing handlers to avoid duplicates (e.g. from Streamlit's default config)
    logger.handlers = []
    logger.addHandler(handler)

    # Silence noisy third-party libraries unless they are WARNING or higher
    for noisy_logger in ["streamlit", "watchdog", "tornado"]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    return logger
