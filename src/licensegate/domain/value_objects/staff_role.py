"""Staff roles for delegated license management."""

from enum import StrEnum

from licensegate.domain.value_objects.license_operation import LicenseOperation


class StaffRole(StrEnum):
    """Roles a delegate can hold on someone else's license."""

    ADMIN = "admin"
    HELPER = "helper"

    def allows(self, operation: LicenseOperation) -> bool:
        """Whether this role may perform the grant operation."""
        return operation in _ROLE_OPERATIONS[self]


_ROLE_OPERATIONS: dict[StaffRole, frozenset[LicenseOperation]] = {
    StaffRole.ADMIN: frozenset(
        {LicenseOperation.READ, LicenseOperation.ADD, LicenseOperation.REMOVE}
    ),
    StaffRole.HELPER: frozenset({LicenseOperation.READ, LicenseOperation.ADD}),
}
