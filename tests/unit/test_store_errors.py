"""Unit tests for driver error translation."""

import sqlite3

from sqlalchemy.exc import IntegrityError

from publishing.domain.exceptions import ConstraintViolationError, DuplicateKeyError
from publishing.infrastructure.database.errors import translate_integrity_error


class FakeAsyncpgError(Exception):
    """Carries the attributes asyncpg puts on its constraint violations."""

    def __init__(self, message: str, **attrs):
        super().__init__(message)
        for name, value in attrs.items():
            setattr(self, name, value)


def _integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO ...", {}, orig)


def test_sqlite_unique_violation_names_entity_and_field():
    error = translate_integrity_error(
        _integrity_error(sqlite3.IntegrityError("UNIQUE constraint failed: authors.email"))
    )
    assert isinstance(error, DuplicateKeyError)
    assert error.entity_type == "Author"
    assert error.field == "email"


def test_sqlite_foreign_key_violation_is_a_constraint_violation():
    error = translate_integrity_error(
        _integrity_error(sqlite3.IntegrityError("FOREIGN KEY constraint failed"))
    )
    assert isinstance(error, ConstraintViolationError)
    assert not isinstance(error, DuplicateKeyError)


def test_sqlite_not_null_violation_is_a_constraint_violation():
    error = translate_integrity_error(
        _integrity_error(sqlite3.IntegrityError("NOT NULL constraint failed: articles.author_id"))
    )
    assert isinstance(error, ConstraintViolationError)


def test_postgres_unique_violation_reads_constraint_and_detail():
    orig = FakeAsyncpgError(
        'duplicate key value violates unique constraint "uq_authors_email"',
        sqlstate="23505",
        constraint_name="uq_authors_email",
        table_name="authors",
        detail="Key (email)=(alice@example.com) already exists.",
    )
    error = translate_integrity_error(_integrity_error(orig))

    assert isinstance(error, DuplicateKeyError)
    assert error.entity_type == "Author"
    assert error.field == "email"
    assert error.value == "alice@example.com"


def test_postgres_foreign_key_violation_keeps_constraint_name():
    orig = FakeAsyncpgError(
        "insert or update on table violates foreign key constraint",
        sqlstate="23503",
        constraint_name="fk_articles_author_id_authors",
    )
    error = translate_integrity_error(_integrity_error(orig))

    assert isinstance(error, ConstraintViolationError)
    assert error.constraint == "fk_articles_author_id_authors"
