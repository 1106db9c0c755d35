import logging
import sys
from pythonjsonlogger import jsonlogger
from procurement.core.config import Settings
from procurement.core.middleware import RequestIdFilter


def configure_logging(settings: Settings) -> None:
    """
    Structured logging (JSON) on stdout.

    Extra fields passed by the managers (op, username, id, version)
    end up as top-level keys of each record.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # clear handlers if reloaded
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    fmt = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={"levelname": "level", "name": "logger"},
    )
    handler.setFormatter(fmt)
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(level)
    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def operation_logger(name: str, op: str, **context) -> logging.LoggerAdapter:
    """Logger bound to one manager operation and its request context."""
    fields = {"op": op}
    fields.update({k: str(v) for k, v in context.items() if v is not None})
    return logging.LoggerAdapter(logging.getLogger(name), fields)
