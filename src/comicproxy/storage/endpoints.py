"""Storage endpoint discovery across Bunny storage regions."""

from typing import Iterable, Optional

DEFAULT_PROVIDER_DOMAIN = "bunnycdn.com"

# "" is the provider's default (non-regional) endpoint
REGION_CATALOG: tuple[str, ...] = ("", "ny", "la", "sg", "de", "uk", "syd", "br")


def default_host(domain: str = DEFAULT_PROVIDER_DOMAIN) -> str:
    """Return the canonical non-regional storage host."""
    return f"storage.{domain}"


def host_for_region(region: str, domain: str = DEFAULT_PROVIDER_DOMAIN) -> str:
    """Map a region code to its storage host."""
    region = region.strip().lower()
    if not region:
        return default_host(domain)
    return f"{region}.storage.{domain}"


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        value = value.strip()
        if not value or value in seen:
            continue
        seen.add(value)
        out.append(value)
    return tuple(out)


def build_host_candidates(
    configured_region: Optional[str],
    domain: str = DEFAULT_PROVIDER_DOMAIN,
) -> tuple[str, ...]:
    """Build the ordered list of storage hosts to probe.

    The configured region's host comes first when set, followed by the
    default host and then every other catalog region in catalog order.

    Args:
        configured_region: Optional region hint such as ``"de"``
        domain: Provider domain the hosts live under

    Returns:
        Host names with duplicates removed, first occurrence kept
    """
    hosts: list[str] = []
    if configured_region and configured_region.strip():
        hosts.append(host_for_region(configured_region, domain))
    hosts.extend(host_for_region(region, domain) for region in REGION_CATALOG)
    return _unique(hosts)


def detect_region(host: str, domain: str = DEFAULT_PROVIDER_DOMAIN) -> Optional[str]:
    """Infer the region code from a host, or None for the default host."""
    if host == default_host(domain):
        return None
    return host.split(".", 1)[0]
