from sqlalchemy import DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from qna.database.base import Base
from qna.database.functions import gen_random_uuid
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .question import Question


class Answer(Base):
    """
    SQLAlchemy model for an Answer.

    Every answer references an existing question; the database rejects the insert
    otherwise (foreign key violation, reclassified by the repository).
    """
    __tablename__ = "answers"

    answer_uuid: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        server_default=gen_random_uuid(),
    )

    # Foreign key to the parent question, indexed for answers-by-question lookups
    question_uuid: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("questions.question_uuid", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    # --- Relationships ---

    question: Mapped["Question"] = relationship(
        "Question",
        back_populates="answers",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Answer(answer_uuid={self.answer_uuid!r}, question_uuid={self.question_uuid!r})>"
