"""User-facing text for command failures."""

from licensegate.domain.exceptions import (
    AlreadyHasScope,
    AlreadyPaused,
    AlreadyStaff,
    AlreadyWildcard,
    AmbiguousLicense,
    Conflict,
    Forbidden,
    LicenseGateError,
    LicenseKeyTaken,
    LicenseNotFound,
    LicensePaused,
    NoLicenseOrRole,
    NotFound,
    NotPaused,
    OwnerAlreadyHasLicense,
    OwnerCannotBeStaff,
    RootOnly,
    SameOwner,
    StaffNotFound,
    StoreUnavailable,
)
from licensegate.domain.value_objects import StaffRole

GENERIC_FAILURE = "An error occurred while processing the command!"

_ROOT_ACTIONS = {
    "createlicense": "create licenses",
    "deletelicense": "delete licenses",
    "pauselicense": "pause licenses",
    "unpauselicense": "unpause licenses",
    "transferlicense": "transfer licenses",
    "licenseinfo": "check license information",
    "allusers": "view all users",
}

_LICENSE_NOT_FOUND = {
    "deletelicense": "License key not found!",
    "pauselicense": "This user does not have a license!",
    "unpauselicense": "This user does not have a license!",
    "licenseinfo": "This user does not have a license!",
    "mylicense": "You don't have a license! Contact the root operator.",
    "addstaff": "You don't have a license!",
    "removestaff": "You don't have a license!",
    "staff": "You don't have a license!",
}

# Checked in order; subclasses first.
_MESSAGES: list[tuple[type[LicenseGateError], str]] = [
    (NoLicenseOrRole, "You don't have a license or staff permissions!"),
    (StaffNotFound, "Staff member not found for this license."),
    (NotFound, "Not found!"),
    (AlreadyWildcard, "User already has access to all scopes."),
    (AlreadyHasScope, "User already has this scope."),
    (LicenseKeyTaken, "That license key is already in use!"),
    (SameOwner, "Cannot transfer license to the same user!"),
    (AlreadyPaused, "License is already paused."),
    (NotPaused, "License is not paused."),
    (AlreadyStaff, "User is already staff for this license."),
    (OwnerCannotBeStaff, "Cannot add the license owner as staff."),
    (Conflict, "That conflicts with an existing record."),
    (LicensePaused, "This license is currently paused. Contact the root operator."),
    (StoreUnavailable, "The service is busy right now, please try again in a moment."),
]


def format_ambiguous(candidates: list, verb: str = "use") -> str:
    lines = "\n".join(
        f"• **{c.license_key}** ({c.role} for {c.owner_tag})" for c in candidates
    )
    return (
        "You have staff access to multiple licenses. Please specify which license "
        f"to {verb} with the `licensekey` option.\n\nYour staff roles:\n{lines}"
    )


def error_message(exc: LicenseGateError, command: str = "") -> str:
    """Text for a failed command; unknown and internal errors get the generic text."""
    if isinstance(exc, RootOnly):
        return f"Only the root operator can {_ROOT_ACTIONS.get(command, 'do this')}!"
    if isinstance(exc, Forbidden):
        if exc.role == StaffRole.HELPER and command == "deauthorize":
            return "Helpers can only add users, not remove them. Ask an admin or license owner."
        verb = "view" if command == "authorized" else "manage"
        return f"You don't have permission to {verb} this license!"
    if isinstance(exc, AmbiguousLicense):
        return format_ambiguous(exc.candidates, "view" if command == "authorized" else "use")
    if isinstance(exc, OwnerAlreadyHasLicense):
        return f"This user already has a license: {exc.license_key}"
    if isinstance(exc, LicenseNotFound):
        return _LICENSE_NOT_FOUND.get(command, f"{exc}!")
    for exc_type, message in _MESSAGES:
        if isinstance(exc, exc_type):
            return message
    return GENERIC_FAILURE
