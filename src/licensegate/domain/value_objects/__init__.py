"""Domain value objects."""

from licensegate.domain.value_objects.license_key import generate_license_key
from licensegate.domain.value_objects.license_operation import LicenseOperation
from licensegate.domain.value_objects.principal import Principal
from licensegate.domain.value_objects.scope import WILDCARD_SCOPE, is_wildcard, normalize_scope
from licensegate.domain.value_objects.staff_role import StaffRole

__all__ = [
    "WILDCARD_SCOPE",
    "LicenseOperation",
    "Principal",
    "StaffRole",
    "generate_license_key",
    "is_wildcard",
    "normalize_scope",
]
