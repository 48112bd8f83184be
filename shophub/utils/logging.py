# shophub/utils/logging.py
import json
import logging
import sys
import traceback
from datetime import datetime, timezone

#pola ktore middleware dokleja przez extra=
_EXTRA_FIELDS = (
    "request_id",
    "user_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "headers",
    "order_id",
)


class JSONFormatter(logging.Formatter):
    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": self.service_name,
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "func": record.funcName,
            "line": record.lineno,
        }

        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                log_obj[field] = getattr(record, field)

        if record.exc_info:
            log_obj["exception"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(log_obj, default=str)


def setup_logging(service_name: str, level: str = "INFO") -> logging.Logger:
    root = logging.getLogger()
    root.setLevel(level.upper())

    #podmieniamy tylko wlasny handler, create_app moze byc wolane wiele razy
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JSONFormatter):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter(service_name))
    root.addHandler(handler)

    return logging.getLogger(service_name)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
