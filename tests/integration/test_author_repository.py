"""Integration tests for the SQLAlchemy author repository."""

import pytest

from publishing.domain.entities import Author
from publishing.domain.exceptions import DuplicateKeyError, EntityNotFoundError, ValidationFailedError
from publishing.infrastructure.dependencies import Repositories, build_repositories


@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamps(repos: Repositories, created_entities):
    author = await repos.authors.create(Author(email=" carol@example.com ", name=" Carol "))

    assert author.id is not None
    assert author.email == "carol@example.com"
    assert author.name == "Carol"
    assert author.created_at is not None
    assert created_entities == [author]


@pytest.mark.asyncio
async def test_create_rejects_invalid_input(repos: Repositories):
    with pytest.raises(ValidationFailedError) as exc_info:
        await repos.authors.create(Author(email="nope", name=""))
    assert set(exc_info.value.fields) == {"email", "name"}
    assert await repos.authors.get_all() == []


@pytest.mark.asyncio
async def test_duplicate_email_is_rejected_not_merged(repos: Repositories, alice: Author):
    with pytest.raises(DuplicateKeyError) as exc_info:
        await repos.authors.create(Author(email="alice@example.com", name="Another Alice"))

    assert exc_info.value.field == "email"
    assert exc_info.value.value == "alice@example.com"
    stored = await repos.authors.get_by_id(alice.id)
    assert stored.name == "Alice Johnson"


@pytest.mark.asyncio
async def test_get_by_id_missing_raises(repos: Repositories):
    with pytest.raises(EntityNotFoundError):
        await repos.authors.get_by_id(404)


@pytest.mark.asyncio
async def test_get_by_email_returns_none_when_absent(repos: Repositories, alice: Author):
    assert await repos.authors.get_by_email("nobody@example.com") is None
    found = await repos.authors.get_by_email("alice@example.com")
    assert found is not None and found.id == alice.id


@pytest.mark.asyncio
async def test_get_all_orders_by_id(repos: Repositories):
    assert await repos.authors.get_all() == []
    first = await repos.authors.create(Author(email="z@example.com", name="Zed"))
    second = await repos.authors.create(Author(email="a@example.com", name="Ann"))

    authors = await repos.authors.get_all()
    assert [a.id for a in authors] == [first.id, second.id]


@pytest.mark.asyncio
async def test_update_changes_fields(repos: Repositories, alice: Author):
    alice.name = "Alice J."
    await repos.authors.update(alice)

    stored = await repos.authors.get_by_id(alice.id)
    assert stored.name == "Alice J."


@pytest.mark.asyncio
async def test_update_with_identical_values_is_not_reported_missing(repos: Repositories, alice: Author):
    same = Author(id=alice.id, email=alice.email, name=alice.name)
    updated = await repos.authors.update(same)
    assert updated.email == alice.email


@pytest.mark.asyncio
async def test_update_missing_author_raises(repos: Repositories):
    with pytest.raises(EntityNotFoundError):
        await repos.authors.update(Author(id=999, email="ghost@example.com", name="Ghost"))


@pytest.mark.asyncio
async def test_failed_update_leaves_entity_untouched(repos: Repositories):
    ghost = Author(id=999, email=" ghost@example.com ", name=" Ghost ")
    stamp = ghost.updated_at

    with pytest.raises(EntityNotFoundError):
        await repos.authors.update(ghost)

    assert ghost.email == " ghost@example.com "
    assert ghost.name == " Ghost "
    assert ghost.updated_at == stamp


@pytest.mark.asyncio
async def test_update_to_taken_email_raises_duplicate(repos: Repositories, alice: Author, bob: Author):
    bob.email = alice.email
    with pytest.raises(DuplicateKeyError):
        await repos.authors.update(bob)

    stored = await repos.authors.get_by_id(bob.id)
    assert stored.email == "bob@example.com"


@pytest.mark.asyncio
async def test_delete_missing_author_raises(repos: Repositories):
    with pytest.raises(EntityNotFoundError):
        await repos.authors.delete(12345)


@pytest.mark.asyncio
async def test_delete_removes_author(repos: Repositories, alice: Author):
    await repos.authors.delete(alice.id)
    with pytest.raises(EntityNotFoundError):
        await repos.authors.get_by_id(alice.id)


@pytest.mark.asyncio
async def test_hook_failure_propagates_after_commit(gateway):
    def failing_hook(entity):
        raise RuntimeError("hook failed")

    repos = build_repositories(gateway, on_created=failing_hook)
    with pytest.raises(RuntimeError, match="hook failed"):
        await repos.authors.create(Author(email="hook@example.com", name="Hooked"))

    assert await repos.authors.get_by_email("hook@example.com") is not None
