# deck_tracker/models/deck_model.py
# Decks are a closed set managed outside the API (see seed/seed_decks.py).

from typing import Optional
from sqlmodel import SQLModel, Field


class Deck(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)
    # Casefolded name; submissions match decks on this
    name_key: str = Field(unique=True, index=True)
