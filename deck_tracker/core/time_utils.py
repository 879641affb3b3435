from datetime import datetime, timezone


def utc_now() -> datetime:
    """Timezone-aware UTC timestamp for created_at columns."""
    return datetime.now(timezone.utc)
