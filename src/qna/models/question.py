from sqlalchemy import DateTime, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from qna.database.base import Base
from qna.database.functions import gen_random_uuid
import uuid
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .answer import Answer


class Question(Base):
    """
    SQLAlchemy model for a Question.

    Rows are created with only title/description; the identifier and timestamp are
    generated by the database. Questions are never updated.
    """
    __tablename__ = "questions"

    # Primary key generated server-side (gen_random_uuid() on Postgres)
    question_uuid: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        server_default=gen_random_uuid(),
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False
    )

    # Set by the database on insert
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    # --- Relationships ---

    # One-to-Many. Deleting a question removes its answers through the
    # ON DELETE CASCADE on answers.question_uuid, not through the ORM.
    answers: Mapped[list["Answer"]] = relationship(
        "Answer",
        back_populates="question",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Question(question_uuid={self.question_uuid!r}, title={self.title!r})>"
