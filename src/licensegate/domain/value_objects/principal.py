"""Principal - an identity with a display tag."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """Chat identity: stable id plus human-readable tag."""

    id: str
    tag: str

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Principal id must not be empty")
