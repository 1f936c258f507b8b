"""Comic storage upload proxy."""

from comicproxy.client import DeleteResult, UploadClient, UploadResult

__version__ = "0.1.0"

__all__ = ["DeleteResult", "UploadClient", "UploadResult"]
