"""Repository test fixtures: a fresh file-backed SQLite database per test.

A file (not ``:memory:``) is used so that every pooled connection, and so
every concurrent caller, sees the same database.
"""

import pytest

from publishing.domain.entities import Article, Author, Category
from publishing.infrastructure.database import SQLAlchemyGateway
from publishing.infrastructure.dependencies import Repositories, build_repositories


@pytest.fixture
async def gateway(tmp_path):
    gw = SQLAlchemyGateway.from_url(f"sqlite:///{tmp_path / 'publishing.db'}")
    await gw.create_schema()
    yield gw
    await gw.dispose()


@pytest.fixture
def created_entities() -> list[object]:
    return []


@pytest.fixture
def repos(gateway, created_entities) -> Repositories:
    return build_repositories(gateway, on_created=created_entities.append)


@pytest.fixture
async def alice(repos: Repositories) -> Author:
    return await repos.authors.create(Author(email="alice@example.com", name="Alice Johnson"))


@pytest.fixture
async def bob(repos: Repositories) -> Author:
    return await repos.authors.create(Author(email="bob@example.com", name="Bob Smith"))


@pytest.fixture
async def go_category(repos: Repositories) -> Category:
    return await repos.categories.create(
        Category(name="Go", description="Go programming language")
    )


@pytest.fixture
async def article(repos: Repositories, alice: Author, go_category: Category) -> Article:
    return await repos.articles.create(
        Article(
            title="Getting Started with Go",
            content="Go is a statically typed, compiled programming language.",
            author_id=alice.id,
            category_id=go_category.id,
        )
    )
