"""Bunny storage gateway with regional endpoint fallback.

A storage zone only answers on the endpoint of its primary region; any
other endpoint replies 401, exactly as it would for a wrong access key.
The gateway therefore walks the candidate hosts in order, moving on only
after a 401 and stopping at the first success or any other error.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence
from urllib.parse import quote

import httpx

from comicproxy.storage.endpoints import DEFAULT_PROVIDER_DOMAIN, detect_region

logger = logging.getLogger(__name__)

ACCESS_KEY_HEADER = "AccessKey"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
MAX_BODY_IN_MESSAGE = 500


@dataclass(frozen=True)
class GatewayOutcome:
    """Result of a single gateway call."""

    ok: bool
    host: Optional[str] = None
    detected_region: Optional[str] = None
    message: Optional[str] = None
    attempted_hosts: tuple[str, ...] = ()

    @classmethod
    def success(
        cls, host: str, detected_region: Optional[str], attempted_hosts: tuple[str, ...] = ()
    ) -> "GatewayOutcome":
        return cls(ok=True, host=host, detected_region=detected_region, attempted_hosts=attempted_hosts)

    @classmethod
    def failure(cls, message: str, attempted_hosts: tuple[str, ...] = ()) -> "GatewayOutcome":
        return cls(ok=False, message=message, attempted_hosts=attempted_hosts)


def encode_object_path(path: str) -> str:
    """Percent-encode an object key so "?" and "#" stay part of the path."""
    return quote(path.lstrip("/"), safe="/")


def _truncate(text: str) -> str:
    if len(text) <= MAX_BODY_IN_MESSAGE:
        return text
    return text[:MAX_BODY_IN_MESSAGE] + "..."


class StorageGateway:
    """Uploads and deletes objects in a Bunny storage zone."""

    def __init__(
        self,
        timeout: float = 30.0,
        domain: str = DEFAULT_PROVIDER_DOMAIN,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.domain = domain
        self._transport = transport

    def object_url(self, host: str, zone: str, path: str) -> str:
        """Build the provider URL for an object."""
        return f"https://{host}/{zone}/{encode_object_path(path)}"

    async def put(
        self,
        hosts: Sequence[str],
        zone: str,
        path: str,
        api_key: str,
        content_type: Optional[str],
        body: bytes,
    ) -> GatewayOutcome:
        """Upload ``body`` to ``path`` in ``zone``, probing ``hosts`` in order."""
        headers = {
            ACCESS_KEY_HEADER: api_key,
            "Content-Type": content_type or DEFAULT_CONTENT_TYPE,
        }
        return await self._probe("PUT", hosts, zone, path, headers, body, not_found_ok=False)

    async def delete(
        self,
        hosts: Sequence[str],
        zone: str,
        path: str,
        api_key: str,
    ) -> GatewayOutcome:
        """Delete ``path`` from ``zone``; an already missing object counts as deleted."""
        headers = {ACCESS_KEY_HEADER: api_key}
        return await self._probe("DELETE", hosts, zone, path, headers, None, not_found_ok=True)

    async def _probe(
        self,
        method: str,
        hosts: Sequence[str],
        zone: str,
        path: str,
        headers: dict[str, str],
        body: Optional[bytes],
        not_found_ok: bool,
    ) -> GatewayOutcome:
        if not hosts:
            return GatewayOutcome.failure("No storage hosts available to try")
        if not path or not path.strip("/"):
            return GatewayOutcome.failure("A storage path is required")

        attempted: list[str] = []
        last_body = ""

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            for host in hosts:
                attempted.append(host)
                url = self.object_url(host, zone, path)
                logger.debug(
                    f"Storage {method} attempt",
                    extra={"storage_host": host, "zone": zone, "attempt": len(attempted)},
                )

                try:
                    response = await client.request(method, url, headers=headers, content=body)
                except httpx.HTTPError as e:
                    error_type = "timeout" if isinstance(e, httpx.TimeoutException) else "transport_error"
                    logger.error(
                        f"Storage {method} failed without a response",
                        extra={"storage_host": host, "zone": zone, "error_type": error_type, "error": str(e)},
                    )
                    return GatewayOutcome.failure(
                        f"Storage request to {host} failed ({error_type}): {e}",
                        tuple(attempted),
                    )

                status = response.status_code
                if response.is_success or (not_found_ok and status == 404):
                    region = detect_region(host, self.domain)
                    logger.info(
                        f"Storage {method} succeeded",
                        extra={
                            "storage_host": host,
                            "detected_region": region,
                            "status_code": status,
                            "attempts": len(attempted),
                        },
                    )
                    return GatewayOutcome.success(host, region, tuple(attempted))

                last_body = response.text
                if status == 401:
                    logger.warning(
                        f"Storage {method} unauthorized, trying next endpoint",
                        extra={"storage_host": host, "zone": zone, "response_body": _truncate(last_body)},
                    )
                    continue

                logger.error(
                    f"Storage {method} rejected",
                    extra={
                        "storage_host": host,
                        "zone": zone,
                        "status_code": status,
                        "response_body": _truncate(last_body),
                    },
                )
                return GatewayOutcome.failure(
                    f"Storage {method} on {host} failed with status {status}: {_truncate(last_body)}",
                    tuple(attempted),
                )

        logger.error(
            f"Storage {method} unauthorized on every endpoint",
            extra={"zone": zone, "attempted_hosts": attempted},
        )
        return GatewayOutcome.failure(
            "Storage authentication failed (401) on every endpoint tried: "
            f"{', '.join(attempted)}. Check that the storage API key is the password "
            f"of storage zone '{zone}' and that the zone name is correct, or set "
            "BUNNY_STORAGE_REGION to the zone's primary region. "
            f"Last response: {_truncate(last_body)}",
            tuple(attempted),
        )
