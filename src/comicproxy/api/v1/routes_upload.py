"""Upload proxy routes.

Admin tooling posts multipart forms here to upload or delete objects in
the Bunny storage zone that backs the comic CDN.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.datastructures import FormData, UploadFile

from comicproxy.auth.token import verify_admin_token
from comicproxy.core.config import settings
from comicproxy.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    StorageProviderError,
    UploadProxyError,
    UploadValidationError,
)
from comicproxy.core.logging import storage_path_context
from comicproxy.models.upload import DeleteResponse, ErrorResponse, UploadResponse
from comicproxy.storage.endpoints import build_host_candidates
from comicproxy.storage.gateway import StorageGateway, encode_object_path

router = APIRouter(tags=["upload"])
logger = logging.getLogger(__name__)

UPLOAD_PATHS = ("/functions/v1/upload", "/upload")
ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type"


def cors_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.CORS_ALLOW_ORIGIN,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }


def _json(payload: dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=payload, status_code=status_code, headers=cors_headers())


def get_storage_gateway() -> StorageGateway:
    """Build the gateway from current settings."""
    return StorageGateway(
        timeout=settings.STORAGE_REQUEST_TIMEOUT,
        domain=settings.BUNNY_STORAGE_DOMAIN,
    )


def _text_field(form: FormData, name: str) -> Optional[str]:
    value = form.get(name)
    return value if isinstance(value, str) else None


async def preflight() -> PlainTextResponse:
    """Answer CORS preflight probes."""
    return PlainTextResponse("ok", headers=cors_headers())


async def handle_upload(
    request: Request,
    gateway: StorageGateway = Depends(get_storage_gateway),
) -> JSONResponse:
    """Upload or delete a file in storage on behalf of an admin."""
    try:
        if not verify_admin_token(request.headers.get("Authorization"), settings.ADMIN_JWT_SECRET):
            raise AuthenticationError()

        if not settings.storage_configured:
            logger.error(
                "Storage settings incomplete",
                extra={
                    "zone_set": bool(settings.BUNNY_STORAGE_ZONE),
                    "api_key_set": bool(settings.BUNNY_STORAGE_API_KEY),
                    "cdn_hostname_set": bool(settings.BUNNY_CDN_HOSTNAME),
                },
            )
            raise ConfigurationError()

        form = await request.form()
        try:
            return await _dispatch(form, gateway)
        finally:
            await form.close()

    except UploadProxyError as e:
        return _json(ErrorResponse(error=str(e)).model_dump(), status_code=e.status_code)
    except Exception as e:
        logger.error(f"Unexpected error during upload request: {e}", exc_info=True)
        return _json(ErrorResponse(error=str(e) or "Unknown error").model_dump(), status_code=500)


async def _dispatch(form: FormData, gateway: StorageGateway) -> JSONResponse:
    path = _text_field(form, "path")
    action = _text_field(form, "action") or "upload"
    hosts = build_host_candidates(settings.BUNNY_STORAGE_REGION, settings.BUNNY_STORAGE_DOMAIN)
    storage_path_context.set(path)

    if action == "delete":
        if not path:
            logger.warning("Delete requested without a path")
        outcome = await gateway.delete(
            hosts,
            settings.BUNNY_STORAGE_ZONE,
            path or "",
            settings.BUNNY_STORAGE_API_KEY,
        )
        if not outcome.ok:
            raise StorageProviderError(outcome.message)
        logger.info("Delete completed", extra={"storage_host": outcome.host})
        return _json(DeleteResponse().model_dump())

    if action != "upload":
        logger.warning(f"Unknown action {action!r}, treating as upload")

    file = form.get("file")
    if not isinstance(file, UploadFile) or not path:
        raise UploadValidationError("File and path are required")

    body = await file.read()
    outcome = await gateway.put(
        hosts,
        settings.BUNNY_STORAGE_ZONE,
        path,
        settings.BUNNY_STORAGE_API_KEY,
        file.content_type,
        body,
    )
    if not outcome.ok:
        raise StorageProviderError(outcome.message)

    logger.info(
        f"Upload completed: path={path}, size={len(body)}",
        extra={"storage_host": outcome.host, "detected_region": outcome.detected_region},
    )
    return _json(
        UploadResponse(
            url=f"https://{settings.BUNNY_CDN_HOSTNAME}/{encode_object_path(path)}",
            storage_host_used=outcome.host,
            detected_region=outcome.detected_region,
        ).model_dump()
    )


for _path in UPLOAD_PATHS:
    router.add_api_route(_path, preflight, methods=["OPTIONS"], include_in_schema=False)
    router.add_api_route(_path, handle_upload, methods=["POST"], response_model=None)
