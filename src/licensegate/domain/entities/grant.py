"""Grant entity - subject approved for a scope under a license."""

from dataclasses import dataclass
from datetime import datetime

from licensegate.domain.value_objects import is_wildcard


@dataclass
class Grant:
    """Grant - (license, subject, scope) triple; scope may be the wildcard."""

    license_key: str
    subject: str
    scope: str
    created_at: datetime

    @property
    def for_all_scopes(self) -> bool:
        return is_wildcard(self.scope)
