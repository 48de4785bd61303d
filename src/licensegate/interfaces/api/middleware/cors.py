"""CORS middleware for the lookup and admin endpoints."""

import falcon
import falcon.asgi

_ALLOW_HEADERS = "Origin, X-Requested-With, Content-Type, Accept, X-Admin-Key"


class CORSMiddleware:
    """Adds CORS headers to every response and answers OPTIONS preflight.

    ``origins`` may contain ``"*"`` to allow any origin; otherwise only listed
    origins are echoed back.
    """

    def __init__(self, origins: list[str], allow_methods: str = "GET, POST, OPTIONS") -> None:
        self._allow_any = "*" in origins
        self._origins = frozenset(o for o in origins if o != "*")
        self._allow_methods = allow_methods

    def _allowed_origin(self, origin: str | None) -> str | None:
        if self._allow_any:
            return "*"
        if origin and origin in self._origins:
            return origin
        return None

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        if req.method == "OPTIONS":
            resp.status = falcon.HTTP_200
            resp.media = {}
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        allowed = self._allowed_origin(req.get_header("Origin"))
        if allowed is None:
            return
        resp.set_header("Access-Control-Allow-Origin", allowed)
        if allowed != "*":
            resp.append_header("Vary", "Origin")
        resp.set_header("Access-Control-Allow-Methods", self._allow_methods)
        resp.set_header("Access-Control-Allow-Headers", _ALLOW_HEADERS)
        resp.set_header("Access-Control-Max-Age", "86400")
