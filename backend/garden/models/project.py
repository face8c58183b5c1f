"""Project table: the only persisted entity."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from garden.mapping.icons import DEFAULT_COLOR, DEFAULT_SHAPE


class Base(DeclarativeBase):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_name: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    creator: Mapped[str | None] = mapped_column(Text, nullable=True)
    project_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    screenshot: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Presentation: the sticker blob is derived from these on read.
    fruit_type: Mapped[str | None] = mapped_column(String(32), nullable=True, default=DEFAULT_SHAPE)
    sticker_color: Mapped[str | None] = mapped_column(String(16), nullable=True, default=DEFAULT_COLOR)
    project_adjective: Mapped[str | None] = mapped_column(String(64), nullable=True)
    project_feeling: Mapped[str | None] = mapped_column(String(64), nullable=True)

    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    # Layout hints; the garden layout may override them.
    position_x: Mapped[float | None] = mapped_column(Float, nullable=True, default=0.0)
    position_y: Mapped[float | None] = mapped_column(Float, nullable=True, default=0.0)
    garden_row: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)

    def __repr__(self) -> str:
        return f"<Project {self.id} {self.project_name!r}>"
