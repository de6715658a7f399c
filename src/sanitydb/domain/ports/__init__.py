"""Ports the domain depends on."""

from __future__ import annotations

from .client import (
    DocumentMutationResponse,
    DocumentMutationResult,
    MutationResponse,
    MutationResult,
    MutationVisibility,
    RemoteClient,
)

__all__ = [
    "DocumentMutationResponse",
    "DocumentMutationResult",
    "MutationResponse",
    "MutationResult",
    "MutationVisibility",
    "RemoteClient",
]
