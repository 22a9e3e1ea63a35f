"""Integration tests for the persistence gateway's transaction handling."""

import asyncio

import pytest
from sqlalchemy import func, select, update

from publishing.domain.exceptions import (
    ConstraintViolationError,
    DuplicateKeyError,
    EntityNotFoundError,
    TransactionAbortedError,
)
from publishing.infrastructure.database import ArticleModel, AuthorModel, SQLAlchemyGateway


def _author(email: str) -> AuthorModel:
    return AuthorModel(email=email, name="Someone")


async def _author_count(gateway: SQLAlchemyGateway) -> int:
    row = await gateway.query_row(select(func.count(AuthorModel.id)))
    return row[0]


@pytest.mark.asyncio
async def test_transaction_commits_on_success(gateway: SQLAlchemyGateway):
    async with gateway.transaction() as db:
        await db.add(_author("one@example.com"))
        await db.add(_author("two@example.com"))

    assert await _author_count(gateway) == 2


@pytest.mark.asyncio
async def test_domain_error_rolls_back_and_propagates(gateway: SQLAlchemyGateway):
    with pytest.raises(EntityNotFoundError):
        async with gateway.transaction() as db:
            await db.add(_author("one@example.com"))
            raise EntityNotFoundError("Article", 1)

    assert await _author_count(gateway) == 0


@pytest.mark.asyncio
async def test_cancellation_rolls_back(gateway: SQLAlchemyGateway):
    with pytest.raises(asyncio.CancelledError):
        async with gateway.transaction() as db:
            await db.add(_author("one@example.com"))
            raise asyncio.CancelledError()

    assert await _author_count(gateway) == 0


@pytest.mark.asyncio
async def test_unique_violation_rolls_back_whole_unit(gateway: SQLAlchemyGateway):
    await gateway.add(_author("taken@example.com"))

    with pytest.raises(DuplicateKeyError) as exc_info:
        async with gateway.transaction() as db:
            await db.add(_author("fresh@example.com"))
            await db.add(_author("taken@example.com"))

    assert exc_info.value.entity_type == "Author"
    assert await _author_count(gateway) == 1


@pytest.mark.asyncio
async def test_foreign_key_violation_is_classified(gateway: SQLAlchemyGateway):
    with pytest.raises(ConstraintViolationError):
        await gateway.add(
            ArticleModel(title="Orphan", slug="orphan", content="No author exists", author_id=999)
        )


@pytest.mark.asyncio
async def test_other_store_errors_abort_the_transaction(gateway: SQLAlchemyGateway):
    with pytest.raises(TransactionAbortedError) as exc_info:
        async with gateway.transaction("broken") as db:
            await db.add(_author("one@example.com"))
            await db.query_row(select(func.missing_function()))

    assert exc_info.value.operation == "broken"
    assert await _author_count(gateway) == 0


@pytest.mark.asyncio
async def test_execute_reports_rows_affected(gateway: SQLAlchemyGateway):
    await gateway.add(_author("one@example.com"))
    await gateway.add(_author("two@example.com"))

    changed = await gateway.execute(update(AuthorModel).values(name="Renamed"))
    assert changed == 2
    assert await gateway.execute(update(AuthorModel).where(AuthorModel.id == -1).values(name="x")) == 0


@pytest.mark.asyncio
async def test_query_rows_is_a_single_pass_iterator(gateway: SQLAlchemyGateway):
    for n in range(3):
        await gateway.add(_author(f"user{n}@example.com"))

    rows = gateway.query_rows(select(AuthorModel.email).order_by(AuthorModel.id))
    emails = [row.email async for row in rows]
    assert emails == ["user0@example.com", "user1@example.com", "user2@example.com"]
    assert [row async for row in rows] == []
