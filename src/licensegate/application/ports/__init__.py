"""Application ports - interfaces for external adapters."""

from licensegate.application.ports.access_resolver import AccessResolver, LicenseAccess
from licensegate.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AccessResolver",
    "LicenseAccess",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
