"""Built-in asset document types."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from .documents import SanityDocument, SanityModel


class SanityAssetSource(SanityModel):
    id: str | None = None
    name: str | None = None
    url: str | None = None


class SanityAsset(SanityDocument):
    """Fields common to uploaded files and images."""

    __sanity_type__: ClassVar[str | None] = None

    url: str | None = None
    path: str | None = None
    asset_id: str | None = None
    original_filename: str | None = None
    extension: str | None = None
    mime_type: str | None = None
    size: int | None = None
    sha1hash: str | None = Field(default=None, alias="sha1hash")
    label: str | None = None
    title: str | None = None
    description: str | None = None
    source: SanityAssetSource | None = None


class SanityImageAsset(SanityAsset):
    __sanity_type__: ClassVar[str | None] = "sanity.imageAsset"

    metadata: dict[str, Any] = Field(default_factory=dict)


class SanityFileAsset(SanityAsset):
    __sanity_type__: ClassVar[str | None] = "sanity.fileAsset"
