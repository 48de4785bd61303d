"""Domain error to HTTP response mapping."""

import logging

import falcon
import falcon.asgi

from licensegate.domain.exceptions import (
    AmbiguousLicense,
    Conflict,
    Forbidden,
    InternalError,
    LicenseGateError,
    LicensePaused,
    NotFound,
    StoreUnavailable,
)

logger = logging.getLogger(__name__)

# First match wins; subclasses before their bases.
_ERROR_STATUS: list[tuple[type[LicenseGateError], str, str]] = [
    (LicensePaused, falcon.HTTP_423, "License is paused"),
    (AmbiguousLicense, falcon.HTTP_409, "License must be specified"),
    (NotFound, falcon.HTTP_404, "Not found"),
    (Conflict, falcon.HTTP_409, "Conflict"),
    (Forbidden, falcon.HTTP_403, "Forbidden"),
    (StoreUnavailable, falcon.HTTP_503, "Service temporarily unavailable"),
]


async def handle_domain_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: LicenseGateError, params
) -> None:
    """Render a domain error. InternalError and unknown errors stay opaque."""
    for exc_type, status, title in _ERROR_STATUS:
        if isinstance(ex, exc_type):
            resp.status = status
            resp.media = {"error": title, "code": type(ex).__name__, "detail": str(ex)}
            if isinstance(ex, StoreUnavailable):
                resp.set_header("Retry-After", "1")
            return
    if not isinstance(ex, InternalError):
        logger.error("Unmapped domain error on %s %s: %r", req.method, req.path, ex)
    else:
        logger.error("Internal error on %s %s: %s", req.method, req.path, ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal server error"}


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params
) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal server error"}
