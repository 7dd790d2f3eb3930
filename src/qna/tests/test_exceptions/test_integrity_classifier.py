from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from qna.exceptions.integrity_classifier import (
    ConstraintKind,
    classify_integrity_error,
    is_foreign_key_violation,
)


class FakePsycopgError(Exception):
    """Driver error carrying a SQLSTATE the way psycopg 3 does."""

    def __init__(self, message: str, sqlstate: str, constraint_name: str | None = None):
        super().__init__(message)
        self.sqlstate = sqlstate
        self.diag = SimpleNamespace(constraint_name=constraint_name)


class FakePsycopg2Error(Exception):
    def __init__(self, message: str, pgcode: str):
        super().__init__(message)
        self.pgcode = pgcode


def wrap(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO answers ...", {}, orig)


class TestClassifyPostgres:

    @pytest.mark.parametrize(
        "code, kind",
        [
            ("23503", ConstraintKind.FOREIGN_KEY),
            ("23505", ConstraintKind.UNIQUE),
            ("23502", ConstraintKind.NOT_NULL),
            ("23514", ConstraintKind.CHECK),
            ("23P01", ConstraintKind.UNKNOWN),
        ],
    )
    def test_sqlstate(self, code, kind):
        exc = wrap(FakePsycopgError("boom", code, "fk_answers_question_uuid_questions"))

        assert classify_integrity_error(exc) == (kind, "fk_answers_question_uuid_questions")

    def test_pgcode_attribute(self):
        exc = wrap(FakePsycopg2Error("boom", "23503"))

        kind, constraint_name = classify_integrity_error(exc)

        assert kind is ConstraintKind.FOREIGN_KEY
        assert constraint_name is None

    def test_sqlstate_wins_over_message(self):
        # message mentions "duplicate" but the code says foreign key
        exc = wrap(FakePsycopgError("duplicate text in message", "23503"))

        assert classify_integrity_error(exc)[0] is ConstraintKind.FOREIGN_KEY


class TestClassifyMessage:

    @pytest.mark.parametrize(
        "message, kind",
        [
            ("FOREIGN KEY constraint failed", ConstraintKind.FOREIGN_KEY),
            ("UNIQUE constraint failed: questions.question_uuid", ConstraintKind.UNIQUE),
            ("NOT NULL constraint failed: answers.content", ConstraintKind.NOT_NULL),
            ("CHECK constraint failed: positive", ConstraintKind.CHECK),
            ("something else entirely", ConstraintKind.UNKNOWN),
        ],
    )
    def test_sqlite_messages(self, message, kind):
        assert classify_integrity_error(wrap(Exception(message))) == (kind, None)


class TestIsForeignKeyViolation:

    def test_true_for_foreign_key(self):
        assert is_foreign_key_violation(wrap(FakePsycopgError("fk", "23503")))

    def test_false_for_unique(self):
        assert not is_foreign_key_violation(wrap(FakePsycopgError("dup", "23505")))

    def test_false_for_other_exceptions(self):
        assert not is_foreign_key_violation(RuntimeError("FOREIGN KEY constraint failed"))
