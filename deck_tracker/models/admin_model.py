# deck_tracker/models/admin_model.py
# Schemas for admin authentication.

from pydantic import BaseModel


class AdminLogin(BaseModel):
    password: str
