"""Service index."""

import falcon
import falcon.asgi

from licensegate import __version__


class IndexResource:
    """GET / - service name, version and public endpoints."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {
            "service": "licensegate",
            "version": __version__,
            "endpoints": {
                "health": "/health",
                "check": "/check/{license}/{subject}",
                "check_legacy": "/check/{subject}",
            },
        }
        resp.status = falcon.HTTP_200
