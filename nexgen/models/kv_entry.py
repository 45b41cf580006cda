from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from nexgen.database.base import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


__all__ = ["KeyValueEntry"]
