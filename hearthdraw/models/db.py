"""
SQLAlchemy ORM models for persistent storage.

Models mirror the dataclass models but add database persistence.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CardDB(Base):
    """
    A card record imported from HearthstoneJSON.

    Keyed by the string card id; dbf_id is the numeric id used in deck codes.
    """

    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    dbf_id: Mapped[int] = mapped_column(Integer, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    card_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    card_set: Mapped[str] = mapped_column(String(100), index=True)
    rarity: Mapped[str | None] = mapped_column(String(20), nullable=True, index=True)
    card_class: Mapped[str] = mapped_column(String(50), default="NEUTRAL", index=True)
    cost: Mapped[int | None] = mapped_column(Integer, nullable=True)
    attack: Mapped[int | None] = mapped_column(Integer, nullable=True)
    health: Mapped[int | None] = mapped_column(Integer, nullable=True)
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    flavor: Mapped[str | None] = mapped_column(Text, nullable=True)
    artist: Mapped[str | None] = mapped_column(String(255), nullable=True)
    collectible: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    # List-valued fields stored as JSON
    mechanics: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    races: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    referenced_tags: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    rune_cost: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    race: Mapped[str | None] = mapped_column(String(50), nullable=True)
    spell_school: Mapped[str | None] = mapped_column(String(50), nullable=True)
    elite: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<CardDB(id={self.id}, set={self.card_set})>"


class CardSetDB(Base):
    """An expansion set with its collectible card count."""

    __tablename__ = "card_sets"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    card_count: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<CardSetDB(id={self.id}, cards={self.card_count})>"


class DataUpdateLogDB(Base):
    """One run of the catalog refresh job."""

    __tablename__ = "data_update_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    update_type: Mapped[str] = mapped_column(String(50))
    status: Mapped[str] = mapped_column(String(20))  # started, completed, failed
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    card_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<DataUpdateLogDB(id={self.id}, status={self.status})>"
