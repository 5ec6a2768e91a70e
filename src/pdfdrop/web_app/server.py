from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from ..config import config
from ..storage import StorageError, UploadStorage
from .routes import index, upload

logger = logging.getLogger(__name__)

UPLOAD_FAILED_MESSAGE = "Upload failed."


def create_app(storage: UploadStorage | None = None) -> FastAPI:
    """Собрать приложение FastAPI.

    Если ``storage`` не передано, используется каталог ``config.upload_dir``.
    Импорт модуля не настраивает логирование и не трогает диск.
    """
    app = FastAPI(title="pdfdrop")
    app.state.storage = storage if storage is not None else UploadStorage(config.upload_dir)

    @app.exception_handler(StorageError)
    async def _storage_error(request: Request, exc: StorageError) -> PlainTextResponse:
        logger.error("Upload failed for %s: %s", request.url.path, exc, exc_info=exc)
        return PlainTextResponse(UPLOAD_FAILED_MESSAGE, status_code=500)

    # --------- Подключение маршрутов ----------
    app.include_router(index.router)
    app.include_router(upload.router)
    return app


app = create_app()
