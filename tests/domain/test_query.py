from __future__ import annotations

import pytest

from sanitydb.domain.query import QuerySpec, type_filter


def test_type_filter_quotes_the_type_name() -> None:
    assert type_filter("sanity.imageAsset") == '_type == "sanity.imageAsset"'
    assert type_filter(None) is None


def test_untyped_query_selects_every_document() -> None:
    assert QuerySpec().to_groq() == "*"


def test_type_and_filter_are_combined() -> None:
    spec = QuerySpec(type_name="article", filter="views > $min")

    assert spec.to_groq() == '*[(_type == "article") && (views > $min)]'


def test_order_slice_and_projection() -> None:
    spec = QuerySpec(
        type_name="article",
        order=("publishedAt desc", "title asc"),
        offset=10,
        limit=5,
        projection="{title, slug}",
    )

    assert spec.to_groq() == (
        '*[_type == "article"] | order(publishedAt desc, title asc)[10...15] {title, slug}'
    )


def test_offset_without_limit_uses_open_slice() -> None:
    assert QuerySpec(type_name="article", offset=3).to_groq().endswith("[3...2147483647]")


def test_single_and_count() -> None:
    spec = QuerySpec(type_name="author", filter="_id == $id")

    assert spec.single() == '*[(_type == "author") && (_id == $id)][0]'
    assert spec.count() == 'count(*[(_type == "author") && (_id == $id)])'


@pytest.mark.parametrize("kwargs", [{"offset": -1}, {"limit": -1}])
def test_negative_bounds_are_rejected(kwargs: dict[str, int]) -> None:
    with pytest.raises(ValueError, match="negative"):
        QuerySpec(**kwargs)
