"""Staff assignment entities."""

from dataclasses import dataclass
from datetime import datetime

from licensegate.domain.value_objects import StaffRole


@dataclass
class StaffMember:
    """Delegate holding a role on a license they do not own."""

    license_key: str
    delegate_id: str
    delegate_tag: str
    role: StaffRole
    granted_by: str
    granted_at: datetime


@dataclass
class DelegateRole:
    """A role held by a delegate, joined with the license owner's tag."""

    license_key: str
    role: StaffRole
    owner_tag: str
