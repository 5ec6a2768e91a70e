from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.datastructures import UploadFile

from ...naming import clean_filename
from ...storage import UploadStorage

router = APIRouter()

logger = logging.getLogger(__name__)

# Имя поля формы, в котором ожидается файл
FIELD_NAME = "pdf"
NO_FILE_MESSAGE = "No file uploaded."


def get_storage(request: Request) -> UploadStorage:
    """Хранилище, привязанное к приложению при его создании."""
    return request.app.state.storage


@router.post("/upload", response_class=PlainTextResponse)
async def upload_file(
    request: Request,
    storage: UploadStorage = Depends(get_storage),
) -> PlainTextResponse:
    """Принять один файл из поля ``pdf`` и сохранить его на диск.

    Текстовое поле с тем же именем, файл без имени (форма отправлена
    без выбора файла) или имя, состоящее только из каталогов, считаются
    отсутствием файла.
    """
    async with request.form() as form:
        upload = form.get(FIELD_NAME)
        if not isinstance(upload, UploadFile) or not clean_filename(upload.filename or ""):
            logger.info("Upload rejected: no file in field %r", FIELD_NAME)
            return PlainTextResponse(NO_FILE_MESSAGE, status_code=400)
        stored = await storage.store(upload.filename, upload, upload.content_type)
    return PlainTextResponse(f"File uploaded: {stored.filename}")
