# src/libs/lot-common/lot_common/logging_utils.py
import logging
import os
import sys
import uuid
from contextvars import ContextVar
from pythonjsonlogger import jsonlogger

# Per-request identifiers. Defaults cover log lines emitted outside a request.
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="<not-set>")
request_id_var: ContextVar[str] = ContextVar("request_id", default="<not-set>")
trace_id_var: ContextVar[str] = ContextVar("trace_id", default="<not-set>")

_LOG_FORMAT = (
    "%(asctime)s %(name)s %(levelname)s %(message)s %(service)s %(environment)s "
    "%(correlation_id)s %(request_id)s %(trace_id)s"
)


class CorrelationIdFilter(logging.Filter):
    """
    Injects the current request identifiers and deployment labels into every
    log record so the JSON formatter can emit them as top-level fields.
    """
    def filter(self, record):
        record.correlation_id = correlation_id_var.get()
        record.request_id = request_id_var.get()
        record.trace_id = trace_id_var.get()
        record.service = os.getenv("SERVICE_NAME", "lot-autocomplete-service")
        record.environment = os.getenv("ENVIRONMENT", "local")
        return True


def setup_logging(level: int = logging.INFO):
    """
    Configures the root logger for structured JSON logging on stdout.
    Existing handlers are dropped so repeated calls never duplicate output.
    """
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()
    root_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            _LOG_FORMAT,
            rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        )
    )
    handler.addFilter(CorrelationIdFilter())
    root_logger.addHandler(handler)


def generate_correlation_id(prefix: str) -> str:
    """Returns a new correlation ID such as 'ACS:<uuid4>'."""
    return f"{prefix}:{uuid.uuid4()}"
