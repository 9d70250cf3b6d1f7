"""File storage schemas."""

from pydantic import BaseModel


class FileUploadResponse(BaseModel):
    success: bool = True
    message: str = "File uploaded successfully"
    content_hash: str
    size: int
    mime_type: str
    original_name: str
    url: str
