"""Admin token verification."""

from comicproxy.auth.token import verify_admin_token

__all__ = ["verify_admin_token"]
