"""
Storage layer

Resolves Bunny storage endpoints and relays uploads/deletes to them,
falling back across regions when an endpoint rejects the zone credentials.
Also provides the storage key layout used for series assets.
"""

from comicproxy.storage.endpoints import build_host_candidates, detect_region
from comicproxy.storage.gateway import GatewayOutcome, StorageGateway, encode_object_path
from comicproxy.storage.paths import (
    banner_path,
    chapter_page_path,
    chapter_pdf_path,
    cover_path,
    generate_file_path,
)

__all__ = [
    "GatewayOutcome",
    "StorageGateway",
    "banner_path",
    "build_host_candidates",
    "chapter_page_path",
    "chapter_pdf_path",
    "cover_path",
    "detect_region",
    "encode_object_path",
    "generate_file_path",
]
