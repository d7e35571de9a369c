"""Logging setup for the command-line entry point."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Union


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs JSON-structured log records."""

    def format(self, record: logging.LogRecord) -> str:
        log_dict: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_dict["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_dict, ensure_ascii=False)


def configure_logging(level: Union[int, str] = logging.WARNING, structured: bool = False) -> logging.Handler:
    """Attach a stderr handler to the ``eir_export`` logger.

    Calling it again replaces the previous handler instead of adding another.
    """
    logger = logging.getLogger("eir_export")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_eir_export_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    handler._eir_export_handler = True
    logger.addHandler(handler)
    return handler
