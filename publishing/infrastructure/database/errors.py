"""Translate driver integrity errors into domain exceptions.

PostgreSQL (asyncpg) errors are classified by SQLSTATE and constraint name,
SQLite errors by message text.
"""

import re

from sqlalchemy.exc import IntegrityError

from publishing.domain.exceptions import (
    ConstraintViolationError,
    DuplicateKeyError,
    PublishingError,
)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"

_ENTITY_BY_TABLE = {
    "authors": "Author",
    "categories": "Category",
    "articles": "Article",
    "comments": "Comment",
}

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (\w+)\.(\w+)")
_PG_UNIQUE_NAME = re.compile(r"^uq_(" + "|".join(_ENTITY_BY_TABLE) + r")_(\w+)$")
_PG_KEY_DETAIL = re.compile(r"Key \((\w+)\)=\((.*)\) already exists")


def _driver_error(exc: IntegrityError) -> BaseException | None:
    """The innermost driver exception, e.g. asyncpg's UniqueViolationError."""
    orig = exc.orig
    cause = getattr(orig, "__cause__", None)
    return cause if cause is not None else orig


def _sqlstate(exc: IntegrityError) -> str | None:
    for candidate in (exc.orig, _driver_error(exc)):
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def _duplicate_key(exc: IntegrityError, message: str) -> DuplicateKeyError:
    match = _SQLITE_UNIQUE.search(message)
    if match:
        table, column = match.groups()
        return DuplicateKeyError(_ENTITY_BY_TABLE.get(table, table), column)

    driver = _driver_error(exc)
    constraint = getattr(driver, "constraint_name", None) or ""
    table = getattr(driver, "table_name", None) or ""
    detail = getattr(driver, "detail", None) or message

    match = _PG_UNIQUE_NAME.match(constraint)
    if match:
        table, column = match.groups()
    else:
        column = constraint or "key"
    value = None
    detail_match = _PG_KEY_DETAIL.search(detail)
    if detail_match:
        column, value = detail_match.groups()
    return DuplicateKeyError(_ENTITY_BY_TABLE.get(table, table or "Entity"), column, value)


def translate_integrity_error(exc: IntegrityError) -> PublishingError:
    """Map an IntegrityError to DuplicateKeyError or ConstraintViolationError."""
    message = str(exc.orig)
    sqlstate = _sqlstate(exc)

    if sqlstate == UNIQUE_VIOLATION or "UNIQUE constraint failed" in message or "duplicate key" in message:
        return _duplicate_key(exc, message)

    constraint = getattr(_driver_error(exc), "constraint_name", None)
    if sqlstate == FOREIGN_KEY_VIOLATION or "FOREIGN KEY constraint failed" in message:
        return ConstraintViolationError(f"Referenced record does not exist: {message}", constraint)
    if sqlstate == NOT_NULL_VIOLATION or "NOT NULL constraint failed" in message:
        return ConstraintViolationError(f"Required column is missing: {message}", constraint)
    return ConstraintViolationError(f"Integrity constraint violated: {message}", constraint)
