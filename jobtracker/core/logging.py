import logging
from typing import Any, Dict
from pythonjsonlogger.json import JsonFormatter
from contextvars import ContextVar

from jobtracker.core.config import settings

# Context variable to store request_id for the current task/request
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

class CustomJsonFormatter(JsonFormatter):
    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)

        # Inject correlation ID if available
        req_id = request_id_var.get()
        if req_id:
            log_record["request_id"] = req_id

        if not log_record.get("timestamp"):
            from datetime import datetime, timezone
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()

        if log_record.get("level"):
            log_record["level"] = log_record["level"].upper()
        else:
            log_record["level"] = record.levelname

def setup_logging(level: str = None):
    logger = logging.getLogger()
    # Avoid stacking handlers when both the server and a client script call this
    for handler in logger.handlers:
        if isinstance(handler.formatter, CustomJsonFormatter):
            return
    log_handler = logging.StreamHandler()
    formatter = CustomJsonFormatter("%(timestamp) %(level) %(name) %(message)")
    log_handler.setFormatter(formatter)
    logger.addHandler(log_handler)
    logger.setLevel(level or settings.log_level)

    # Suppress verbose logs from some libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
