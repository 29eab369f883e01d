"""JSON logging for the catalog service: one line per record on stdout."""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, Optional

SERVICE = "catalog_service"
DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"

# Attributes every LogRecord carries; anything else arrived through ``extra``
_STANDARD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}


class CatalogJSONFormatter(logging.Formatter):
    def __init__(self, exclude_fields: Optional[Iterable[str]] = None):
        super().__init__()
        self.skipped = _STANDARD_ATTRIBUTES | set(exclude_fields or ())

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "service": SERVICE,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in self.skipped
        )

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def _rotating_handler(
    path: Path, level: int, formatter: logging.Formatter, max_bytes: int, backups: int
) -> logging.Handler:
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backups)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_catalog_logging(
    service_name: str = SERVICE,
    log_level: str = "INFO",
    enable_file_logging: bool = False,
    log_dir: Optional[str] = None,
    max_file_size: int = 100 * 1024 * 1024,
    backup_count: int = 5,
    exclude_fields: Optional[Iterable[str]] = None,
) -> logging.Logger:
    """Named logger writing JSON to stdout.

    With file logging on, ``<name>.log`` receives every record and
    ``<name>_errors.log`` only ERROR and above. Calling it again for the same
    name replaces the handlers instead of stacking them.
    """
    level = logging.getLevelName(log_level.upper())
    formatter = CatalogJSONFormatter(exclude_fields=exclude_fields)

    logger = logging.getLogger(service_name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if enable_file_logging:
        directory = Path(log_dir) if log_dir else DEFAULT_LOG_DIR
        directory.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _rotating_handler(
                directory / f"{service_name}.log",
                level,
                formatter,
                max_file_size,
                backup_count,
            )
        )
        logger.addHandler(
            _rotating_handler(
                directory / f"{service_name}_errors.log",
                logging.ERROR,
                formatter,
                max_file_size,
                backup_count,
            )
        )

    return logger
