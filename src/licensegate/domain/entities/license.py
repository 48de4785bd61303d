"""License entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class License:
    """License - authorization boundary owned by exactly one principal."""

    key: str
    owner_id: str
    owner_tag: str
    created_at: datetime
    paused: bool = False
