"""Входная точка для запуска сервиса pdfdrop.

Запускает сервер FastAPI, определённый в модуле ``pdfdrop.web_app.server``.
Параметры задаются через переменные окружения (``PORT``, ``HOST``,
``UPLOAD_DIR``, ``LOG_LEVEL``, ``LOG_FILE``) или файл ``.env``.
"""

from __future__ import annotations

import logging
import socket
import sys
from pathlib import Path

import uvicorn

from pdfdrop.config import config
from pdfdrop.logging_config import setup_logging
from pdfdrop.web_app.server import app

logger = logging.getLogger(__name__)


class ListeningServer(uvicorn.Server):
    """uvicorn-сервер, сообщающий адрес только после привязки порта."""

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info("Server is running on http://localhost:%s", self.config.port)


def prepare_upload_dir(path: str | Path) -> Path:
    """Создать каталог загрузок, если его ещё нет."""
    upload_dir = Path(path)
    if not upload_dir.exists():
        logger.info("Creating upload directory %s", upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def build_server() -> ListeningServer:
    # log_config=None: uvicorn не перенастраивает логирование поверх setup_logging
    server_config = uvicorn.Config(app, host=config.host, port=config.port, log_config=None)
    return ListeningServer(server_config)


def main() -> None:
    """Точка входа для запуска сервера."""
    setup_logging(config.log_level, config.log_file)
    prepare_upload_dir(config.upload_dir)

    server = build_server()
    try:
        server.run()
    except Exception:
        logger.exception("Не удалось запустить сервер")
        sys.exit(1)


if __name__ == "__main__":
    main()
