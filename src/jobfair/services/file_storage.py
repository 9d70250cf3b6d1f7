"""Content-addressable file storage."""

import hashlib
import json
import os
import re
import tempfile
from pathlib import Path

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobfair.config import get_settings
from jobfair.exceptions import NotFoundError, PayloadTooLargeError, ValidationFailedError
from jobfair.models.stored_file import StoredFile

logger = structlog.get_logger()

HASH_PATTERN = re.compile(r"^[a-f0-9]{64}$", re.IGNORECASE)
METADATA_FILENAME = "metadata.json"
DEFAULT_MIME_TYPE = "application/octet-stream"


def is_valid_hash(value: str) -> bool:
    return bool(HASH_PATTERN.match(value))


def _write_atomic(path: Path, content: bytes) -> None:
    """Write to a temp file next to ``path`` and rename it into place."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class FileStorageService:
    """Stores uploads by SHA-256 of their content.

    Blobs live at ``<storage_dir>/<h[0:2]>/<h[2:4]>/<h>``. Identical
    content always maps to the same path, so a blob is written once and
    never modified afterwards.
    """

    def __init__(
        self,
        db: AsyncSession,
        storage_dir: Path | None = None,
        max_size_mb: int | None = None,
    ):
        settings = get_settings()
        self.db = db
        self.storage_dir = Path(storage_dir or settings.storage_dir)
        self.max_size_bytes = (max_size_mb or settings.upload_max_size_mb) * 1024 * 1024

    @property
    def metadata_path(self) -> Path:
        return self.storage_dir / METADATA_FILENAME

    def blob_path(self, content_hash: str) -> Path:
        return self.storage_dir / content_hash[0:2] / content_hash[2:4] / content_hash

    async def store(
        self,
        content: bytes,
        filename: str,
        mime_type: str | None = None,
    ) -> StoredFile:
        """Persist an upload and return its metadata row."""
        if not content:
            raise ValidationFailedError("No file provided")
        if len(content) > self.max_size_bytes:
            raise PayloadTooLargeError(
                f"File size exceeds {self.max_size_bytes // (1024 * 1024)}MB limit"
            )

        content_hash = hashlib.sha256(content).hexdigest()
        mime_type = mime_type or DEFAULT_MIME_TYPE

        path = self.blob_path(content_hash)
        if path.exists():
            logger.info("file_already_stored", content_hash=content_hash)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            _write_atomic(path, content)
            logger.info("file_stored", content_hash=content_hash, size=len(content))

        self._record_metadata(content_hash, mime_type, filename, len(content))

        result = await self.db.execute(
            select(StoredFile).where(StoredFile.content_hash == content_hash)
        )
        stored = result.scalar_one_or_none()
        if stored:
            stored.mime_type = mime_type
            stored.original_filename = filename
            stored.size = len(content)
        else:
            stored = StoredFile(
                content_hash=content_hash,
                mime_type=mime_type,
                original_filename=filename,
                size=len(content),
            )
            self.db.add(stored)
        await self.db.flush()

        return stored

    def _record_metadata(
        self, content_hash: str, mime_type: str, filename: str, size: int
    ) -> None:
        """Add an entry to the metadata sidecar. The first writer wins."""
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        metadata = self.read_metadata()
        if content_hash in metadata:
            return

        metadata[content_hash] = {
            "mimeType": mime_type,
            "originalFilename": filename,
            "size": size,
        }
        _write_atomic(self.metadata_path, json.dumps(metadata, indent=2).encode("utf-8"))
        logger.debug("file_metadata_updated", content_hash=content_hash)

    def read_metadata(self) -> dict:
        try:
            with open(self.metadata_path, encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError:
            logger.warning("file_metadata_corrupt", path=str(self.metadata_path))
            return {}

    async def get(self, content_hash: str) -> tuple[StoredFile, Path]:
        """Resolve a stored file to its metadata row and blob path."""
        if not is_valid_hash(content_hash):
            raise ValidationFailedError("Invalid content hash format")
        content_hash = content_hash.lower()

        result = await self.db.execute(
            select(StoredFile).where(StoredFile.content_hash == content_hash)
        )
        stored = result.scalar_one_or_none()
        if not stored:
            raise NotFoundError("File metadata not found")

        path = self.blob_path(content_hash)
        if not path.is_file():
            logger.warning("file_blob_missing", content_hash=content_hash)
            raise NotFoundError("File not found on disk")

        return stored, path
