"""Kinds of grant operations an actor can request on a license."""

from enum import StrEnum


class LicenseOperation(StrEnum):
    """Grant operations checked by the access resolver."""

    READ = "read"
    ADD = "add"
    REMOVE = "remove"
