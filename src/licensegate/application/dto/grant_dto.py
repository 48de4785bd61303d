"""Grant DTOs."""

from dataclasses import dataclass, field

from licensegate.application.ports import LicenseAccess
from licensegate.domain.entities import Grant


@dataclass
class GrantAddResult:
    """Outcome of a successful grant add."""

    license_key: str
    subject: str
    scope: str
    for_all_scopes: bool
    superseded: int = 0  # concrete grants removed by a wildcard add


@dataclass
class GrantListing:
    """Grants of one license grouped by subject."""

    license_key: str
    paused: bool
    scopes_by_subject: dict[str, list[str]] = field(default_factory=dict)
    total_grants: int = 0

    @property
    def total_subjects(self) -> int:
        return len(self.scopes_by_subject)


def group_by_subject(grants: list[Grant]) -> dict[str, list[str]]:
    """Map subject -> scopes, preserving first-seen subject order."""
    grouped: dict[str, list[str]] = {}
    for grant in grants:
        grouped.setdefault(grant.subject, []).append(grant.scope)
    return grouped


@dataclass
class AuthorizeOutput:
    """Grant added through the command surface, with the actor's capacity."""

    access: LicenseAccess
    grant: GrantAddResult


@dataclass
class DeauthorizeOutput:
    """Result of a grant removal through the command surface."""

    access: LicenseAccess
    subject: str
    scope: str | None
    removed: bool
