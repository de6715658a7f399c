from __future__ import annotations

from importlib import metadata

from sanitydb.adapters.sanity import SanityAPIError, SanityClient, Serializer
from sanitydb.config import ConfigurationError, MissingConfigurationError, SanityOptions
from sanitydb.context import DataContext, DocumentSetDescriptor
from sanitydb.domain.document_set import DocumentSet
from sanitydb.domain.errors import EmptyCommitError
from sanitydb.domain.model import (
    SanityDocument,
    SanityFileAsset,
    SanityImageAsset,
    SanityReference,
)
from sanitydb.domain.mutations import MutationBuilder, MutationOperation, Patch
from sanitydb.domain.ports import (
    DocumentMutationResponse,
    MutationResponse,
    MutationVisibility,
)

try:
    __version__ = metadata.version("sanitydb")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"

__all__ = [
    "ConfigurationError",
    "DataContext",
    "DocumentMutationResponse",
    "DocumentSet",
    "DocumentSetDescriptor",
    "EmptyCommitError",
    "MissingConfigurationError",
    "MutationBuilder",
    "MutationOperation",
    "MutationResponse",
    "MutationVisibility",
    "Patch",
    "SanityAPIError",
    "SanityClient",
    "SanityDocument",
    "SanityFileAsset",
    "SanityImageAsset",
    "SanityOptions",
    "SanityReference",
    "Serializer",
    "__version__",
]
