"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from licensegate.domain.exceptions import LicenseGateError
from licensegate.interfaces.api.resources.admin import AdminGrantsResource
from licensegate.interfaces.api.resources.check import CheckResource
from licensegate.interfaces.api.resources.errors import (
    handle_domain_error,
    handle_unexpected_error,
)
from licensegate.interfaces.api.resources.health import HealthResource
from licensegate.interfaces.api.resources.index import IndexResource


def create_app(
    check_resource: CheckResource,
    admin_resource: AdminGrantsResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(LicenseGateError, handle_domain_error)

    app.add_route("/", IndexResource())
    app.add_route("/health", health_resource)
    app.add_route("/health/ready", health_resource, suffix="ready")
    app.add_route("/check/{license_key}/{subject}", check_resource)
    # Falcon needs one field name per path level; the legacy route reads it as the subject.
    app.add_route("/check/{license_key}", check_resource, suffix="legacy")
    app.add_route("/admin/grants", admin_resource)
    app.add_route("/admin/grants/remove", admin_resource, suffix="remove")
    app.add_route("/admin/licenses/{license_key}/grants", admin_resource, suffix="license")
    return app
