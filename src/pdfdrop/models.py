from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class StoredUpload(BaseModel):
    filename: str
    path: str
    original_filename: str
    content_type: Optional[str] = None
    size: int = 0
