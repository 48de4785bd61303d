"""Domain exceptions."""

from collections.abc import Sequence


class LicenseGateError(Exception):
    """Base exception for LicenseGate."""

    pass


# --- NotFound ---


class NotFound(LicenseGateError):
    """Requested resource was not found."""

    pass


class LicenseNotFound(NotFound):
    """No license matches the key or owner."""

    pass


class StaffNotFound(NotFound):
    """Delegate is not staff for the license."""

    pass


class NoLicenseOrRole(NotFound):
    """Actor neither owns a license nor holds a staff role anywhere."""

    pass


# --- Conflict ---


class Conflict(LicenseGateError):
    """Operation would violate a uniqueness rule."""

    pass


class OwnerAlreadyHasLicense(Conflict):
    """Owner already owns a license."""

    def __init__(self, owner_id: str, license_key: str | None = None) -> None:
        super().__init__(f"Owner {owner_id} already has license {license_key}")
        self.owner_id = owner_id
        self.license_key = license_key


class LicenseKeyTaken(Conflict):
    """A license with the requested key already exists."""

    pass


class AlreadyWildcard(Conflict):
    """Subject already has access to all scopes."""

    pass


class AlreadyHasScope(Conflict):
    """Subject already has this exact scope."""

    pass


class AlreadyStaff(Conflict):
    """Delegate already holds a role on the license."""

    pass


class OwnerCannotBeStaff(Conflict):
    """License owner cannot be added as staff of their own license."""

    pass


class SameOwner(Conflict):
    """Transfer source and destination are the same principal."""

    pass


class AlreadyPaused(Conflict):
    """License is already paused."""

    pass


class NotPaused(Conflict):
    """License is not paused."""

    pass


# --- Forbidden ---


class Forbidden(LicenseGateError):
    """Actor is not allowed to perform the operation."""

    def __init__(self, message: str = "Forbidden", role: str | None = None) -> None:
        super().__init__(message)
        self.role = role


class RootOnly(Forbidden):
    """Operation is reserved for the root actor."""

    pass


# --- State ---


class LicensePaused(LicenseGateError):
    """Grant mutation attempted on a paused license."""

    pass


class AmbiguousLicense(LicenseGateError):
    """Actor is staff on several licenses and must name one explicitly."""

    def __init__(self, candidates: Sequence) -> None:
        super().__init__(f"Actor has staff roles on {len(candidates)} licenses")
        self.candidates = list(candidates)


# --- Storage ---


class StoreUnavailable(LicenseGateError):
    """Storage timed out or the connection failed. Safe to retry the whole operation."""

    pass


class InternalError(LicenseGateError):
    """Unexpected storage failure."""

    pass
