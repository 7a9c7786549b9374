"""
Birdhouse Backend - Bird SQLAlchemy Model
==========================================

What:  ORM model representing the `birds` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.
Who:   Used by BirdService for CRUD operations and by the test suite's create_all().

Table Design:
    - Integer primary key assigned by the store (autoincrement), never changed
    - name / species: free text supplied by clients, nullable
    - likes: NOT NULL counter, default 0, CHECK (likes >= 0)
"""

from typing import Optional

from sqlalchemy import CheckConstraint, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# Upper bound of the INTEGER primary key column on every supported backend
MAX_BIRD_ID = 2**31 - 1


class Bird(Base):
    """
    A bird record.

    Lifecycle:
        1. Created via POST /birds (id assigned, likes defaults to 0)
        2. Fields overwritten via PATCH/PUT /birds/{id}
        3. likes bumped by one via PATCH /birds/{id}/like
        4. Never deleted through the API
    """

    __tablename__ = "birds"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Common name, e.g. 'Robin'",
    )

    species: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Scientific name, e.g. 'Turdus migratorius'",
    )

    likes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
        comment="Like counter; only grows through PATCH /birds/{id}/like",
    )

    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_birds_likes_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Bird(id={self.id}, name='{self.name}', likes={self.likes})>"
