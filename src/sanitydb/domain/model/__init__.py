"""Document types understood by the data context."""

from __future__ import annotations

from .assets import SanityAsset, SanityAssetSource, SanityFileAsset, SanityImageAsset
from .documents import SanityDocument, SanityModel, default_type_name, document_type_name
from .reference import SanityReference

__all__ = [
    "SanityAsset",
    "SanityAssetSource",
    "SanityDocument",
    "SanityFileAsset",
    "SanityImageAsset",
    "SanityModel",
    "SanityReference",
    "default_type_name",
    "document_type_name",
]
