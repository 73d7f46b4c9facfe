"""
Database models for Daybook.

Models: JournalEntry, Tag, EntryTag, User.
"""

from datetime import date, datetime
from typing import Any, Dict, Optional

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class JournalEntry(Base):
    """
    A single day's journal entry.

    One row per calendar day. Word count is derived from content
    on every write and never taken from the caller.
    """

    __tablename__ = "journal_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    entry_date: Mapped[date] = mapped_column(Date, unique=True, index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(200), default="")
    content: Mapped[str] = mapped_column(Text, default="")
    primary_mood: Mapped[str] = mapped_column(String(50), default="")
    secondary_mood1: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    secondary_mood2: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    category: Mapped[str] = mapped_column(String(80), default="General")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    word_count: Mapped[int] = mapped_column(Integer, default=0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "id": self.id,
            "entry_date": self.entry_date.isoformat() if self.entry_date else None,
            "title": self.title,
            "content": self.content,
            "primary_mood": self.primary_mood,
            "secondary_mood1": self.secondary_mood1,
            "secondary_mood2": self.secondary_mood2,
            "category": self.category,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "word_count": self.word_count,
        }

    def __repr__(self) -> str:
        return f"<JournalEntry {self.id}: {self.entry_date} {self.title!r} ({self.word_count} words)>"


class Tag(Base):
    """
    A label attached to entries.

    Names are unique ignoring case; the stores enforce that, not the schema.
    """

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), index=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Tag {self.id}: {self.name}>"


class EntryTag(Base):
    """
    Association row between an entry and a tag.

    Removed explicitly by the stores when the entry is deleted
    or its tag set is replaced.
    """

    __tablename__ = "entry_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    entry_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("journal_entries.id"), index=True, nullable=False
    )
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tags.id"), index=True, nullable=False
    )

    def __repr__(self) -> str:
        return f"<EntryTag {self.id}: entry_id={self.entry_id} tag_id={self.tag_id}>"


class User(Base):
    """
    Local account record.

    Owned by the login layer; kept here so it shares the same database.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(200), default="")
    full_name: Mapped[str] = mapped_column(String(200), default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    last_login_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.username}>"
