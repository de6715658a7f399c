"""Port for the remote service the data context talks to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sanitydb.domain.mutations import MutationPayload


class MutationVisibility(StrEnum):
    """When the effects of a committed transaction become visible to queries."""

    SYNC = "sync"
    ASYNC = "async"
    DEFERRED = "deferred"


@dataclass(frozen=True, slots=True)
class MutationResult:
    id: str
    operation: str
    document: Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class MutationResponse:
    """Acknowledgement of a committed transaction."""

    transaction_id: str | None = None
    results: tuple[MutationResult, ...] = ()

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(result.id for result in self.results)

    @property
    def is_empty(self) -> bool:
        return self.transaction_id is None and not self.results


@dataclass(frozen=True, slots=True)
class DocumentMutationResult[TDoc]:
    id: str
    operation: str
    document: TDoc | None = None


@dataclass(frozen=True, slots=True)
class DocumentMutationResponse[TDoc]:
    """Acknowledgement narrowed to one document type."""

    doc_type: type[TDoc]
    transaction_id: str | None = None
    results: tuple[DocumentMutationResult[TDoc], ...] = ()

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(result.id for result in self.results)

    @property
    def documents(self) -> list[TDoc]:
        return [result.document for result in self.results if result.document is not None]


@runtime_checkable
class RemoteClient(Protocol):
    """Executes queries and commits mutation payloads against the document store.

    Implementations raise on transport, authentication and validation failures; they
    never return partial results.
    """

    async def execute_query(self, query: str, params: Mapping[str, Any] | None = None) -> Any: ...

    async def fetch[TDoc](
        self,
        doc_type: type[TDoc],
        query: str,
        params: Mapping[str, Any] | None = None,
    ) -> list[TDoc]: ...

    async def commit_mutations(
        self,
        payload: MutationPayload,
        *,
        return_ids: bool = False,
        return_documents: bool = False,
        visibility: MutationVisibility = MutationVisibility.SYNC,
    ) -> MutationResponse: ...

    async def commit_mutations_for[TDoc](
        self,
        doc_type: type[TDoc],
        payload: MutationPayload,
        *,
        return_ids: bool = False,
        return_documents: bool = False,
        visibility: MutationVisibility = MutationVisibility.SYNC,
    ) -> DocumentMutationResponse[TDoc]: ...


__all__ = [
    "DocumentMutationResponse",
    "DocumentMutationResult",
    "MutationResponse",
    "MutationResult",
    "MutationVisibility",
    "RemoteClient",
]
