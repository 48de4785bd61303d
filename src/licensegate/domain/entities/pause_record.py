"""Pause marker for a license."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PauseRecord:
    """A license is paused while this record exists."""

    license_key: str
    owner_id: str
    owner_tag: str
    paused_at: datetime
