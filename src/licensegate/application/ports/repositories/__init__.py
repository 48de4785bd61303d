"""Repository ports."""

from licensegate.application.ports.repositories.grant_repository import GrantRepository
from licensegate.application.ports.repositories.license_repository import (
    LicenseRepository,
)
from licensegate.application.ports.repositories.staff_repository import StaffRepository

__all__ = [
    "GrantRepository",
    "LicenseRepository",
    "StaffRepository",
]
