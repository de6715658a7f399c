"""Document types and a recording remote client shared by context tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING, Any

from sanitydb.domain.model import SanityDocument, SanityReference
from sanitydb.domain.ports.client import (
    DocumentMutationResponse,
    DocumentMutationResult,
    MutationResponse,
    MutationResult,
    MutationVisibility,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sanitydb.domain.mutations import MutationPayload


class Author(SanityDocument):
    name: str


class Article(SanityDocument):
    title: str
    published_at: datetime | None = None
    author: SanityReference[Author] | None = None


class RemoteFailureError(RuntimeError):
    """Stands in for a transport or service failure."""


@dataclass
class CommitCall:
    payload: MutationPayload
    doc_type: type | None
    return_ids: bool
    return_documents: bool
    visibility: MutationVisibility


@dataclass
class FakeRemoteClient:
    """In-memory remote client that records every call it receives."""

    fail_with: BaseException | None = None
    query_results: dict[str, Any] = field(default_factory=dict)
    commits: list[CommitCall] = field(default_factory=list)
    queries: list[tuple[str, Mapping[str, Any] | None]] = field(default_factory=list)

    async def execute_query(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        self.queries.append((query, params))
        if self.fail_with is not None:
            raise self.fail_with
        return self.query_results.get(query)

    async def fetch[TDoc](
        self,
        doc_type: type[TDoc],
        query: str,
        params: Mapping[str, Any] | None = None,
    ) -> list[TDoc]:
        result = await self.execute_query(query, params)
        if result is None:
            return []
        items = result if isinstance(result, list) else [result]
        return [doc_type.model_validate(item) for item in items]  # type: ignore[attr-defined]

    async def commit_mutations(
        self,
        payload: MutationPayload,
        *,
        return_ids: bool = False,
        return_documents: bool = False,
        visibility: MutationVisibility = MutationVisibility.SYNC,
    ) -> MutationResponse:
        self.commits.append(CommitCall(payload, None, return_ids, return_documents, visibility))
        if self.fail_with is not None:
            raise self.fail_with
        return MutationResponse(
            transaction_id=f"tx-{len(self.commits)}",
            results=tuple(
                MutationResult(id=f"doc-{index}", operation=next(iter(mutation)))
                for index, mutation in enumerate(payload.mutations)
            ),
        )

    async def commit_mutations_for[TDoc](
        self,
        doc_type: type[TDoc],
        payload: MutationPayload,
        *,
        return_ids: bool = False,
        return_documents: bool = False,
        visibility: MutationVisibility = MutationVisibility.SYNC,
    ) -> DocumentMutationResponse[TDoc]:
        self.commits.append(CommitCall(payload, doc_type, return_ids, return_documents, visibility))
        if self.fail_with is not None:
            raise self.fail_with
        return DocumentMutationResponse(
            doc_type=doc_type,
            transaction_id=f"tx-{len(self.commits)}",
            results=tuple(
                DocumentMutationResult(id=f"doc-{index}", operation=next(iter(mutation)))
                for index, mutation in enumerate(payload.mutations)
            ),
        )
