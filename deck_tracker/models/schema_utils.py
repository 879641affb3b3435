# deck_tracker/models/schema_utils.py
# Shared field checks for request schemas.

from typing import Optional

# Largest id the store's BIGINT columns can hold
MAX_ID = 2**63 - 1


def name_key_for(name: str) -> str:
    """Normalized form used for case-insensitive matching and uniqueness."""
    return name.strip().casefold()


def require_text(value: str) -> str:
    """Trim a required string field; blank values are rejected."""
    if value is None:
        raise ValueError("field is required")
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return require_text(value)
