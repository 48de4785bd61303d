"""License key generation."""

import secrets
from datetime import datetime


def generate_license_key(owner_id: str, now: datetime, salted: bool = False) -> str:
    """Derive a key from the owner id and a millisecond timestamp.

    ``salted`` appends a random suffix, used when the plain key collides.
    """
    key = f"license_{owner_id}_{int(now.timestamp() * 1000)}"
    if salted:
        key = f"{key}_{secrets.token_hex(3)}"
    return key
