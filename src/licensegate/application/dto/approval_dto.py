"""Approval check DTO."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ApprovalOutput:
    """Answer of the query facade. Never says whether the license exists."""

    subject: str
    approved: bool
    checked_at: datetime
    license_key: str | None = None
