from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


class ORMModel(BaseModel):
    """Response model that can be built straight from a SQLAlchemy row."""

    model_config = ConfigDict(from_attributes=True)


def to_naive_utc(value: datetime) -> datetime:
    """Stored datetimes are naive UTC; convert aware inputs accordingly."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
