from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from sanitydb.domain.model import SanityDocument
from sanitydb.domain.mutations import DeleteTarget, MutationOperation, Patch
from tests.helpers.documents import Article, Author

if TYPE_CHECKING:
    from sanitydb.context import DataContext
    from tests.helpers.documents import FakeRemoteClient


def test_writes_register_tagged_entries(context: DataContext) -> None:
    articles = context.document_set(Article)
    article = Article(id="a1", title="Hello")

    created = articles.create(article)
    replaced = articles.update(article)
    kept = articles.create_if_not_exists(article)
    deleted = articles.delete("a2")
    patched = articles.patch("a3", set={"title": "Patched"})

    assert [entry.operation for entry in context.mutations.mutations] == [
        MutationOperation.CREATE,
        MutationOperation.CREATE_OR_REPLACE,
        MutationOperation.CREATE_IF_NOT_EXISTS,
        MutationOperation.DELETE,
        MutationOperation.PATCH,
    ]
    assert all(entry.doc_type is Article for entry in (created, replaced, kept, deleted, patched))
    assert created.payload is article
    assert deleted.payload == DeleteTarget(id="a2")
    assert isinstance(patched.payload, Patch)
    assert patched.payload.set == {"title": "Patched"}


def test_writes_never_touch_the_network(
    context: DataContext, fake_client: FakeRemoteClient
) -> None:
    context.document_set(Article).create(Article(title="Local"))

    assert fake_client.commits == []
    assert fake_client.queries == []


def test_query_based_writes(context: DataContext) -> None:
    articles = context.document_set(Article)

    deleted = articles.delete_by_query('*[_type == "article" && archived]')
    patched = articles.patch_by_query('*[_type == "article"]', unset=["legacy"])

    assert deleted.payload == DeleteTarget(query='*[_type == "article" && archived]')
    assert patched.payload.query == '*[_type == "article"]'
    assert patched.payload.unset == ("legacy",)


def test_replace_requires_document_id(context: DataContext) -> None:
    articles = context.document_set(Article)

    with pytest.raises(ValueError, match="id is required"):
        articles.create_or_replace(Article(title="No id"))
    with pytest.raises(ValueError, match="id is required"):
        articles.create_if_not_exists(Article(title="No id"))
    assert len(context.mutations) == 0


def test_wrong_document_type_is_rejected(context: DataContext) -> None:
    with pytest.raises(TypeError, match="expected Article"):
        context.document_set(Article).create(Author(name="Ada"))  # type: ignore[arg-type]


def test_generic_document_set_accepts_any_document(context: DataContext) -> None:
    entry = context.documents.create(Author(name="Ada"))

    assert entry.doc_type is SanityDocument


def test_empty_patch_is_rejected(context: DataContext) -> None:
    with pytest.raises(ValueError, match="no operations"):
        context.document_set(Article).patch("a1")


def test_pending_and_clear_changes_are_scoped(context: DataContext) -> None:
    articles = context.document_set(Article)
    authors = context.document_set(Author)
    article_entry = articles.delete("a1")
    author_entry = authors.delete("p1")

    assert articles.pending == (article_entry,)

    articles.clear_changes()

    assert articles.pending == ()
    assert context.mutations.mutations == (author_entry,)


def test_commit_delegates_to_scoped_commit(
    context: DataContext, fake_client: FakeRemoteClient
) -> None:
    authors = context.document_set(Author)
    authors.delete("p1")
    context.document_set(Article).delete("a1")

    response = asyncio.run(authors.commit(return_documents=True))

    assert response.doc_type is Author
    assert fake_client.commits[0].doc_type is Author
    assert fake_client.commits[0].return_documents is True
    assert len(context.mutations) == 1


def test_fetch_builds_typed_query(context: DataContext, fake_client: FakeRemoteClient) -> None:
    query = '*[(_type == "article") && (views > $min)] | order(title asc)[0...2]'
    fake_client.query_results[query] = [
        {"_id": "a1", "_type": "article", "title": "One", "publishedAt": "2024-01-07T12:00:00Z"},
        {"_id": "a2", "_type": "article", "title": "Two"},
    ]

    articles = asyncio.run(
        context.document_set(Article).fetch(
            "views > $min", params={"min": 10}, order="title asc", limit=2
        )
    )

    assert fake_client.queries == [(query, {"min": 10})]
    assert [article.title for article in articles] == ["One", "Two"]
    assert articles[0].published_at is not None
    assert articles[0].published_at.year == 2024


def test_get_returns_none_when_missing(
    context: DataContext, fake_client: FakeRemoteClient
) -> None:
    result = asyncio.run(context.document_set(Author).get("missing"))

    assert result is None
    assert fake_client.queries == [('*[(_type == "author") && (_id == $id)][0]', {"id": "missing"})]


def test_get_and_first(context: DataContext, fake_client: FakeRemoteClient) -> None:
    fake_client.query_results['*[(_type == "author") && (_id == $id)][0]'] = {
        "_id": "p1",
        "_type": "author",
        "name": "Ada",
    }
    fake_client.query_results['*[_type == "author"] | order(name asc)[0...1]'] = [
        {"_id": "p2", "_type": "author", "name": "Alan"}
    ]
    authors = context.document_set(Author)

    found = asyncio.run(authors.get("p1"))
    first = asyncio.run(authors.first(order="name asc"))

    assert found is not None
    assert found.name == "Ada"
    assert first is not None
    assert first.id == "p2"


def test_count(context: DataContext, fake_client: FakeRemoteClient) -> None:
    fake_client.query_results['count(*[_type == "sanity.imageAsset"])'] = 7

    assert asyncio.run(context.images.count()) == 7


def test_remote_failures_propagate_from_reads(
    context: DataContext, fake_client: FakeRemoteClient
) -> None:
    fake_client.fail_with = ConnectionError("unreachable")

    with pytest.raises(ConnectionError):
        asyncio.run(context.document_set(Article).fetch())
