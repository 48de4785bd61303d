"""Grant scope - a concrete resource token or the all-scopes wildcard."""

WILDCARD_SCOPE = "*ALL*"


def normalize_scope(scope: str | None) -> str:
    """Map an omitted or blank scope to the wildcard."""
    if scope is None or not scope.strip():
        return WILDCARD_SCOPE
    return scope.strip()


def is_wildcard(scope: str) -> bool:
    return scope == WILDCARD_SCOPE
