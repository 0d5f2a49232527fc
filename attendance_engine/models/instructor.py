from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone


class Instructor(SQLModel, table=True):
    """Instructor, linked to the identity provider's user id."""
    __tablename__ = "instructors"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(unique=True, index=True)
    name: str
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
