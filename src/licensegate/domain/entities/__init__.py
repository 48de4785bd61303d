"""Domain entities."""

from licensegate.domain.entities.grant import Grant
from licensegate.domain.entities.license import License
from licensegate.domain.entities.pause_record import PauseRecord
from licensegate.domain.entities.staff_member import DelegateRole, StaffMember

__all__ = [
    "DelegateRole",
    "Grant",
    "License",
    "PauseRecord",
    "StaffMember",
]
