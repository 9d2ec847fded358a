"""
Logging setup for the document extraction service.

Development gets readable single-line logs; every other environment gets one
JSON object per line. Both formats carry the request id assigned by the HTTP
middleware, so an upload can be followed from request to background processing.
"""

import logging
import sys
import json
import traceback
from datetime import datetime, timezone
from typing import Optional, Union

from app.core.config import settings

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
NO_REQUEST_ID = "-"

# Parser libraries log a warning for every malformed object they skip
NOISY_LOGGERS = {
    "pypdf": logging.ERROR,
    "multipart": logging.WARNING,
    "python_multipart": logging.WARNING,
}


class RequestIdFilter(logging.Filter):
    """Give records logged outside a request a placeholder request id"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = NO_REQUEST_ID
        return True


class StructuredFormatter(logging.Formatter):
    """Formats records as JSON lines for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "environment": settings.ENV,
            "service": settings.PROJECT_NAME,
        }

        request_id = getattr(record, "request_id", NO_REQUEST_ID)
        if request_id != NO_REQUEST_ID:
            log_data["request_id"] = request_id

        # Context attached through ContextAdapter, e.g. training_file_id
        for key, value in record.__dict__.items():
            if key.startswith("ctx_"):
                log_data[key[4:]] = value

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info)
            }

        return json.dumps(log_data, default=str)


class ContextAdapter(logging.LoggerAdapter):
    """
    Logger adapter that attaches fixed context to every record.

    Keys are stored as ``ctx_<key>`` attributes so they cannot clash with
    LogRecord's own attributes.
    """

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        for key, value in self.extra.items():
            extra[f"ctx_{key}"] = value
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(
    log_level: Union[str, int] = "INFO",
    enable_json_logs: Optional[bool] = None
) -> ContextAdapter:
    """
    Configure the root logger for the service.

    Args:
        log_level: Level name or number
        enable_json_logs: Force JSON output on or off; defaults to JSON outside development

    Returns:
        Adapter for the "app" logger
    """
    if isinstance(log_level, str):
        log_level = getattr(logging, log_level.upper())

    if enable_json_logs is None:
        enable_json_logs = settings.ENV != "development"

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Reconfiguring must not stack handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(StructuredFormatter() if enable_json_logs else logging.Formatter(TEXT_FORMAT))
    root_logger.addHandler(handler)

    for name, level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(max(level, log_level))

    app_logger = logging.getLogger("app")
    app_logger.setLevel(log_level)

    return ContextAdapter(app_logger, {})


def get_logger(name: str, **context) -> ContextAdapter:
    """Return a logger that adds ``context`` to each record it emits."""
    return ContextAdapter(logging.getLogger(name), context)
