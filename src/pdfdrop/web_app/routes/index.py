from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

UPLOAD_FORM = """
<form ref='uploadForm'
  id='uploadForm'
  action="/upload"
  method="post"
  encType="multipart/form-data">
    <input type="file" name="pdf" />
    <input type='submit' value='Upload!' />
</form>
"""


@router.get("/", response_class=HTMLResponse)
async def serve_index() -> HTMLResponse:
    """Отдать форму загрузки."""
    return HTMLResponse(UPLOAD_FORM)
