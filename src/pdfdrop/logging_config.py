from __future__ import annotations

import logging
from pathlib import Path

FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Логгеры uvicorn, которые должны писать через корневой обработчик
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _build_handlers(log_file: Path | str | None) -> list[logging.Handler]:
    formatter = logging.Formatter(FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str, log_file: Path | str | None) -> int:
    """Configure the root logger for the service and uvicorn.

    Parameters
    ----------
    level:
        Log level name (e.g., "INFO", "DEBUG"). Unknown names fall back to
        ``INFO``.
    log_file:
        Optional file that receives the same records as the console.

    uvicorn's own loggers lose their handlers and propagate to the root, so
    access and server messages share one format and one file. Returns the
    numeric level applied.
    """
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(log_file):
        root.addHandler(handler)
    root.setLevel(numeric)

    for name in UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True
        uv_logger.setLevel(logging.NOTSET)
    return numeric


__all__ = ["FORMAT", "UVICORN_LOGGERS", "setup_logging"]
