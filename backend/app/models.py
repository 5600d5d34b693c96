from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class FormStateEntry(SQLModel, table=True):
    """One key of the saved team-builder form; `value` holds JSON text."""

    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(index=True, nullable=False)
    value: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("key"),)
