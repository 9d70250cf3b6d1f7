"""Content-addressed file upload and download."""

import structlog
from fastapi import APIRouter, File, UploadFile
from fastapi.responses import FileResponse

from jobfair.api.deps import CurrentUser, FileStorage
from jobfair.schemas.file import FileUploadResponse

logger = structlog.get_logger()

router = APIRouter()

FILE_URL_PREFIX = "/api/v1/files"


@router.post("/upload", response_model=FileUploadResponse, name="files.upload")
async def upload_file(
    storage: FileStorage,
    current_user: CurrentUser,
    file: UploadFile = File(...),
):
    """Store an upload under the SHA-256 of its content."""
    content = await file.read()
    stored = await storage.store(
        content,
        filename=file.filename or "upload",
        mime_type=file.content_type,
    )
    logger.info(
        "file_uploaded",
        user_id=current_user.id,
        content_hash=stored.content_hash,
        size=stored.size,
    )

    return {
        "content_hash": stored.content_hash,
        "size": stored.size,
        "mime_type": stored.mime_type,
        "original_name": stored.original_filename,
        "url": f"{FILE_URL_PREFIX}/{stored.content_hash}",
    }


@router.get("/{content_hash}", name="files.read")
async def read_file(content_hash: str, storage: FileStorage):
    """Serve a stored file. Content never changes for a given hash."""
    stored, path = await storage.get(content_hash)
    return FileResponse(
        path,
        media_type=stored.mime_type,
        filename=stored.original_filename,
        content_disposition_type="inline",
        headers={
            "Cache-Control": "public, max-age=31536000, immutable",
            "ETag": f'"{stored.content_hash}"',
        },
    )
