# app/core/logging.py
import logging
import sys

APP_LOGGER = "catalog-api"

_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Un singur handler stdout pe root (idempotent); întoarce logger-ul aplicației."""
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
        root.addHandler(handler)

    # uvicorn își păstrează handler-ele; aliniem doar nivelul
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)
    # SQL doar cu DB_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return logging.getLogger(APP_LOGGER)
