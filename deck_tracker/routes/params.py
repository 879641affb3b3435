# deck_tracker/routes/params.py
# Shared path parameter types for the routers.

from typing import Annotated

from fastapi import Path

from deck_tracker.models.schema_utils import MAX_ID

# Ids outside the store's BIGINT range fail validation (400) before any query runs
EntityId = Annotated[int, Path(ge=1, le=MAX_ID)]
