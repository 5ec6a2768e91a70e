"""Local upload directory used as the only storage for received files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Callable

from starlette.datastructures import UploadFile

from .models import StoredUpload
from .naming import current_millis, storage_name

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
MAX_ATTEMPTS = 100


class StorageError(Exception):
    """Raised when an upload cannot be written to the upload directory."""


class UploadStorage:
    """Write uploads into a single, pre-existing directory.

    The directory is never created here: its presence is a deployment
    precondition (see :func:`pdfdrop.main.main`). Files are opened with
    exclusive create, so an existing file is never overwritten.
    """

    def __init__(
        self,
        directory: str | Path,
        *,
        clock: Callable[[], int] = current_millis,
        chunk_size: int = CHUNK_SIZE,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        self.directory = Path(directory)
        self.clock = clock
        self.chunk_size = chunk_size
        self.max_attempts = max_attempts

    def path_for(self, filename: str) -> Path:
        return self.directory / filename

    async def store(
        self,
        original_name: str,
        source: UploadFile,
        content_type: str | None = None,
    ) -> StoredUpload:
        """Stream ``source`` to disk and describe the stored file.

        The timestamp is taken once; if the generated name is already taken
        the next disambiguated name is tried.
        """
        timestamp = self.clock()
        for attempt in range(self.max_attempts):
            filename = storage_name(timestamp, original_name, attempt)
            dest = self.path_for(filename)
            try:
                fh = open(dest, "xb")
            except FileExistsError:
                logger.debug("Storage name %s is taken", filename)
                continue
            except OSError as exc:
                raise StorageError(f"Cannot create {dest}: {exc}") from exc

            size = await self._copy(source, fh, dest)
            logger.info("Stored %s as %s (%d bytes)", original_name, filename, size)
            return StoredUpload(
                filename=filename,
                path=str(dest.resolve()),
                original_filename=original_name,
                content_type=content_type,
                size=size,
            )

        raise StorageError(
            f"No free name for {original_name!r} after {self.max_attempts} attempts"
        )

    async def _copy(self, source: UploadFile, fh: BinaryIO, dest: Path) -> int:
        size = 0
        try:
            with fh:
                while True:
                    chunk = await source.read(self.chunk_size)
                    if not chunk:
                        break
                    fh.write(chunk)
                    size += len(chunk)
        except OSError as exc:
            dest.unlink(missing_ok=True)
            raise StorageError(f"Failed to write {dest}: {exc}") from exc
        except BaseException:
            # Не оставляем обрезанный файл (в т.ч. при отмене запроса)
            dest.unlink(missing_ok=True)
            raise
        return size


__all__ = ["CHUNK_SIZE", "StorageError", "UploadStorage"]
