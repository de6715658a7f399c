"""Errors raised by the data context."""

from __future__ import annotations


class EmptyCommitError(RuntimeError):
    """Raised when a per-type commit is requested with nothing queued for that type."""

    def __init__(self, doc_type: type) -> None:
        super().__init__(f"No pending changes for document type {doc_type.__qualname__}")
        self.doc_type = doc_type
