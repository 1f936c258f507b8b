"""Upload proxy response models."""

from typing import Literal, Optional

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Response model for a successful upload."""

    url: str
    storage_host_used: str
    detected_region: Optional[str] = None


class DeleteResponse(BaseModel):
    """Response model for a successful delete."""

    success: Literal[True] = True


class ErrorResponse(BaseModel):
    """Response model for every failure."""

    error: str
