"""
Logging setup for the fleet selection service.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fleet.core.config import settings

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"

_configured = False

class JsonFormatter(logging.Formatter):
    """Formats log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False, default=str)

def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT)

def setup_logging(force: bool = False) -> None:
    """
    Configure the root logger from settings.

    Console output always; a rotating file handler when LOG_FILE is set.
    Repeated calls are no-ops unless ``force`` is true.
    """
    global _configured
    if _configured and not force:
        return
    
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    
    formatter = _build_formatter(settings.LOG_FORMAT)
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)
    
    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    
    root.setLevel(settings.LOG_LEVEL)
    
    # SQL echo is controlled by DB_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    
    _configured = True
