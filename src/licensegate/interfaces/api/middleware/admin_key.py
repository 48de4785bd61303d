"""Admin key middleware - marks requests carrying the shared admin secret."""

import hmac

import falcon.asgi


def admin_key_matches(candidate: str | None, admin_key: str) -> bool:
    """Constant-time comparison; an unset admin key never matches."""
    if not admin_key or not isinstance(candidate, str) or not candidate:
        return False
    return hmac.compare_digest(candidate.encode(), admin_key.encode())


class AdminKeyMiddleware:
    """Sets req.context.is_admin from the X-Admin-Key header."""

    def __init__(self, admin_key: str) -> None:
        self._admin_key = admin_key

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        req.context.is_admin = admin_key_matches(req.get_header("X-Admin-Key"), self._admin_key)
