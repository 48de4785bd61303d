"""Application entry point and composition root."""

import logging

import uvicorn
from falcon.asgi import App

from licensegate import __version__
from licensegate.application.ports import AccessResolver
from licensegate.application.use_cases.approval.check_approval import CheckApprovalUseCase
from licensegate.application.use_cases.grant.admin_grants import AdminGrantsUseCase
from licensegate.config import Settings, get_settings
from licensegate.infrastructure.permission.access_resolver import LicenseAccessResolver
from licensegate.infrastructure.persistence.store import Store, build_store
from licensegate.interfaces.api.app import create_app
from licensegate.interfaces.api.middleware.admin_key import AdminKeyMiddleware
from licensegate.interfaces.api.middleware.cors import CORSMiddleware
from licensegate.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from licensegate.interfaces.api.resources.admin import AdminGrantsResource
from licensegate.interfaces.api.resources.check import CheckResource
from licensegate.interfaces.api.resources.health import HealthResource
from licensegate.interfaces.commands.dispatcher import CommandDispatcher, CommandUseCases
from licensegate.log_config import configure_logging

logger = logging.getLogger(__name__)


def create_command_dispatcher(
    store: Store, access_resolver: AccessResolver
) -> CommandDispatcher:
    """Chat command surface over the same store as the HTTP API."""
    return CommandDispatcher(CommandUseCases.build(store.uow_factory, access_resolver))


def create_licensegate_app(settings: Settings | None = None, store: Store | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    store = store or build_store(settings)

    if not settings.root_actor_id:
        logger.warning("ROOT_ACTOR_ID is not set; license lifecycle commands are disabled")
    if not settings.admin_key:
        logger.warning("ADMIN_KEY is not set; admin endpoints will reject every request")

    check_approval = CheckApprovalUseCase(
        unit_of_work_factory=store.uow_factory,
        legacy_license_key=settings.legacy_license_key,
        deny_paused=settings.deny_paused_approvals,
    )
    admin_grants = AdminGrantsUseCase(unit_of_work_factory=store.uow_factory)

    check_resource = CheckResource(check_approval)
    admin_resource = AdminGrantsResource(admin_grants, settings.admin_key)
    health_resource = HealthResource(store.uow_factory)

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    middleware: list = [CORSMiddleware(cors_origins)]
    if store.pool is not None:
        middleware.append(PoolLifespanMiddleware(store.pool))
    middleware.append(AdminKeyMiddleware(settings.admin_key))

    return create_app(
        check_resource=check_resource,
        admin_resource=admin_resource,
        health_resource=health_resource,
        middleware=middleware,
    )


def main() -> None:
    """CLI entry point - run the HTTP API under uvicorn."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger.info(
        "LicenseGate v%s starting (%s, %s store)",
        __version__,
        settings.environment,
        settings.storage_backend,
    )
    app = create_licensegate_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
