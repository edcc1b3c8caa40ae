"""Database models for the settings store."""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class SettingEntry(Base):
    """A single key in the settings store. ``value`` holds JSON text."""

    __tablename__ = "settings"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self):
        return f"<SettingEntry(key='{self.key}', value='{self.value[:50]}')>"
