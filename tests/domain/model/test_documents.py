from __future__ import annotations

from typing import ClassVar

import pytest

from sanitydb.domain.model import (
    SanityDocument,
    SanityFileAsset,
    SanityImageAsset,
    SanityReference,
    default_type_name,
    document_type_name,
)
from tests.helpers.documents import Article, Author


class BlogPost(SanityDocument):
    title: str


class FAQEntry(SanityDocument):
    question: str


class Legacy(SanityDocument):
    __sanity_type__: ClassVar[str | None] = "legacy.page"


def test_type_names_follow_class_names() -> None:
    assert document_type_name(Article) == "article"
    assert document_type_name(BlogPost) == "blogPost"
    assert document_type_name(FAQEntry) == "faqEntry"
    assert document_type_name(Legacy) == "legacy.page"
    assert document_type_name(SanityDocument) is None
    assert default_type_name(dict) == "dict"


def test_builtin_asset_type_names() -> None:
    assert document_type_name(SanityImageAsset) == "sanity.imageAsset"
    assert document_type_name(SanityFileAsset) == "sanity.fileAsset"


def test_new_documents_get_their_type() -> None:
    assert BlogPost(title="x").type == "blogPost"
    assert BlogPost(title="x", type="custom").type == "custom"


def test_documents_read_camel_case_and_system_fields() -> None:
    article = Article.model_validate(
        {
            "_id": "drafts.a1",
            "_type": "article",
            "_rev": "rev-9",
            "_createdAt": "2024-01-07T12:00:00Z",
            "title": "Hello",
            "publishedAt": "2024-02-01T08:30:00Z",
            "unmodelled": {"kept": True},
        }
    )

    assert article.id == "drafts.a1"
    assert article.rev == "rev-9"
    assert article.is_draft
    assert article.created_at is not None
    assert article.published_at is not None
    assert article.model_extra == {"unmodelled": {"kept": True}}


def test_reference_accepts_reference_shape() -> None:
    reference = SanityReference[Author].model_validate(
        {"_type": "reference", "_ref": "p1", "_weak": True}
    )

    assert reference.ref == "p1"
    assert reference.weak is True
    assert reference.value is None


def test_reference_accepts_dereferenced_document() -> None:
    article = Article.model_validate(
        {
            "_id": "a1",
            "title": "Hello",
            "author": {"_id": "p1", "_type": "author", "name": "Ada"},
        }
    )

    assert article.author is not None
    assert article.author.ref == "p1"
    assert isinstance(article.author.value, Author)
    assert article.author.value.name == "Ada"


def test_reference_serialises_as_reference_only() -> None:
    author = Author(id="p1", name="Ada")
    article = Article(id="a1", title="Hello", author=SanityReference[Author].to(author))

    dumped = article.model_dump(by_alias=True, exclude_none=True)

    assert dumped["author"] == {"_type": "reference", "_ref": "p1"}


def test_reference_to_unsaved_document_fails() -> None:
    with pytest.raises(ValueError, match="without an id"):
        SanityReference.to(Author(name="Ada"))
