"""HTTP client for calling the upload proxy from admin tooling."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    """Outcome of an upload call."""

    url: Optional[str] = None
    error: Optional[str] = None


@dataclass
class DeleteResult:
    """Outcome of a delete call."""

    success: bool = False
    error: Optional[str] = None


class UploadClient:
    """Posts upload/delete forms to the proxy with an admin bearer token."""

    def __init__(
        self,
        function_url: str,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.function_url = function_url
        self.timeout = timeout
        self._transport = transport

    async def _post(
        self,
        token: str,
        data: Dict[str, str],
        files: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            return await client.post(
                self.function_url,
                headers={"Authorization": f"Bearer {token}"},
                data=data,
                files=files,
            )

    @staticmethod
    def _error_from(response: httpx.Response, fallback: str) -> str:
        try:
            body = response.json()
        except ValueError:
            return fallback
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return fallback

    async def upload_file(
        self,
        token: Optional[str],
        content: bytes,
        filename: str,
        path: str,
        content_type: Optional[str] = None,
    ) -> UploadResult:
        """Upload ``content`` to ``path`` and return the public CDN URL."""
        if not token:
            return UploadResult(error="Not authenticated")

        files = {"file": (filename, content, content_type or "application/octet-stream")}
        try:
            response = await self._post(token, {"path": path, "action": "upload"}, files)
        except httpx.HTTPError as e:
            logger.warning("Upload request failed", extra={"path": path, "error": str(e)})
            return UploadResult(error=str(e) or "Network error")

        if not response.is_success:
            return UploadResult(error=self._error_from(response, "Upload failed"))
        try:
            body = response.json()
        except ValueError:
            logger.warning("Upload response was not JSON", extra={"path": path, "status_code": response.status_code})
            return UploadResult(error="Invalid response from upload service")
        if not isinstance(body, dict) or not body.get("url"):
            return UploadResult(error="Upload response did not include a URL")
        return UploadResult(url=body["url"])

    async def delete_file(self, token: Optional[str], path: str) -> DeleteResult:
        """Delete ``path`` from storage."""
        if not token:
            return DeleteResult(error="Not authenticated")

        try:
            response = await self._post(token, {"path": path, "action": "delete"})
        except httpx.HTTPError as e:
            logger.warning("Delete request failed", extra={"path": path, "error": str(e)})
            return DeleteResult(error=str(e) or "Network error")

        if not response.is_success:
            return DeleteResult(error=self._error_from(response, "Delete failed"))
        return DeleteResult(success=True)
