"""Tests for creating an article together with its (possibly new) author."""

import asyncio

import pytest

from publishing.domain.entities import Article, Author
from publishing.domain.exceptions import DuplicateKeyError, ValidationFailedError
from publishing.infrastructure.dependencies import Repositories

CONTENT = "A long enough body for the article under test."


@pytest.mark.asyncio
async def test_creates_new_author_and_article(repos: Repositories, created_entities):
    author, article = await repos.articles.create_with_author(
        "Dana Scully", "dana@example.com", "Field Notes", CONTENT
    )

    assert author.id is not None
    assert article.author_id == author.id
    assert article.author is not None and article.author.email == "dana@example.com"
    assert created_entities == [author, article]

    stored = await repos.authors.get_by_email("dana@example.com")
    assert stored is not None and stored.id == author.id


@pytest.mark.asyncio
async def test_reuses_existing_author_by_email(repos: Repositories, alice: Author, created_entities):
    created_entities.clear()

    author, article = await repos.articles.create_with_author(
        "Someone Else", "alice@example.com", "Reused Author", CONTENT
    )

    assert author.id == alice.id
    assert author.name == "Alice Johnson"
    assert article.author_id == alice.id
    assert created_entities == [article]


@pytest.mark.asyncio
async def test_same_email_twice_yields_one_author_two_articles(repos: Repositories):
    first_author, first = await repos.articles.create_with_author(
        "Eve", "eve@example.com", "First of Two", CONTENT
    )
    second_author, second = await repos.articles.create_with_author(
        "Eve", "eve@example.com", "Second of Two", CONTENT
    )

    assert first_author.id == second_author.id
    assert len(await repos.authors.get_all()) == 1
    articles = await repos.articles.get_by_author_id(first_author.id)
    assert {a.id for a in articles} == {first.id, second.id}


@pytest.mark.asyncio
async def test_failed_article_insert_rolls_back_new_author(repos: Repositories, alice: Author):
    await repos.articles.create(
        Article(title="Taken Title", content=CONTENT, author_id=alice.id)
    )

    with pytest.raises(DuplicateKeyError) as exc_info:
        await repos.articles.create_with_author(
            "Frank", "frank@example.com", "Taken Title", CONTENT
        )

    assert exc_info.value.field == "slug"
    assert await repos.authors.get_by_email("frank@example.com") is None


@pytest.mark.asyncio
async def test_invalid_author_fields_are_reported_against_author(repos: Repositories):
    with pytest.raises(ValidationFailedError) as exc_info:
        await repos.articles.create_with_author("", "not-an-email", "Hi", "short")

    assert exc_info.value.entity_type == "Author"
    assert set(exc_info.value.fields) == {"name", "email"}
    assert await repos.authors.get_all() == []


@pytest.mark.asyncio
async def test_invalid_article_fields_are_reported_against_article(repos: Repositories):
    with pytest.raises(ValidationFailedError) as exc_info:
        await repos.articles.create_with_author("Grace", "grace@example.com", "Hi", "short")

    assert exc_info.value.entity_type == "Article"
    assert set(exc_info.value.fields) == {"title", "content"}
    assert await repos.authors.get_by_email("grace@example.com") is None


@pytest.mark.asyncio
async def test_concurrent_calls_with_one_new_email_create_one_author(repos: Repositories):
    results = await asyncio.gather(
        *(
            repos.articles.create_with_author(
                "Heidi", "heidi@example.com", f"Concurrent Article {n}", CONTENT
            )
            for n in range(5)
        ),
        return_exceptions=True,
    )

    created = [r for r in results if not isinstance(r, BaseException)]
    failures = [r for r in results if isinstance(r, BaseException)]
    assert created
    assert all(isinstance(f, DuplicateKeyError) for f in failures)
    assert all(f.entity_type == "Author" and f.field == "email" for f in failures)

    authors = await repos.authors.get_all()
    assert len(authors) == 1
    assert {author.id for author, _ in created} == {authors[0].id}
    articles = await repos.articles.get_by_author_id(authors[0].id)
    assert len(articles) == len(created)
