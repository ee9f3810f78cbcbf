# logging_config.py
from __future__ import annotations

import logging
import sys

from request_context import get_request_id

APP_LOGGERS = ("app", "llm", "store", "fallback")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(process)d] [rid=%(request_id)s] %(message)s"

class RequestIdFilter(logging.Filter):
    """Stamp records with the current request id unless 'extra' already carries one."""
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = get_request_id()
        return True

def setup_logging(level: int | str = logging.INFO) -> None:
    root = logging.getLogger()
    root.setLevel(level)

    # Ensure there is a stdout handler; reuse existing if present
    handler = None
    for h in root.handlers:
        if isinstance(h, logging.StreamHandler):
            handler = h
            break

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        root.addHandler(handler)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
        handler.addFilter(RequestIdFilter())

    for name in APP_LOGGERS:
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.propagate = True

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.INFO)
