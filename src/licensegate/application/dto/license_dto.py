"""License DTOs."""

from dataclasses import dataclass, field

from licensegate.domain.entities import License, StaffMember


@dataclass
class LicenseDetails:
    """License with its grants grouped by subject and its staff."""

    license: License
    scopes_by_subject: dict[str, list[str]] = field(default_factory=dict)
    staff: list[StaffMember] = field(default_factory=list)
    total_grants: int = 0

    @property
    def total_subjects(self) -> int:
        return len(self.scopes_by_subject)


@dataclass
class StaffListing:
    """Staff of the actor's own license."""

    license_key: str
    members: list[StaffMember] = field(default_factory=list)
