"""Pending mutations staged by document sets and sent on commit.

The builder is the single queue shared by every document set of a context. Entries
keep registration order: the service applies the mutations of one transaction in the
order they are submitted.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from sanitydb.adapters.sanity.serialization import Serializer


class MutationOperation(StrEnum):
    CREATE = "create"
    CREATE_OR_REPLACE = "createOrReplace"
    CREATE_IF_NOT_EXISTS = "createIfNotExists"
    PATCH = "patch"
    DELETE = "delete"


@dataclass(slots=True)
class Patch:
    """Partial update of one document (by ``id``) or of every match of ``query``."""

    id: str | None = None
    query: str | None = None
    set: Mapping[str, Any] | None = None
    set_if_missing: Mapping[str, Any] | None = None
    unset: tuple[str, ...] = ()
    inc: Mapping[str, int | float] | None = None
    dec: Mapping[str, int | float] | None = None
    insert: Mapping[str, Any] | None = None
    if_revision_id: str | None = None

    def __post_init__(self) -> None:
        if (self.id is None) == (self.query is None):
            raise ValueError("Patch requires exactly one of id or query")
        self.unset = tuple(self.unset)

    @property
    def is_empty(self) -> bool:
        return not (
            self.set or self.set_if_missing or self.unset or self.inc or self.dec or self.insert
        )

    def to_wire(self, serializer: Serializer) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id} if self.id is not None else {"query": self.query}
        if self.if_revision_id is not None:
            payload["ifRevisionID"] = self.if_revision_id
        # attribute paths are passed through verbatim; callers write them in wire casing
        for key, values in (
            ("set", self.set),
            ("setIfMissing", self.set_if_missing),
            ("inc", self.inc),
            ("dec", self.dec),
            ("insert", self.insert),
        ):
            if values:
                payload[key] = {path: serializer.dump_value(value) for path, value in values.items()}
        if self.unset:
            payload["unset"] = list(self.unset)
        return payload


@dataclass(frozen=True, slots=True)
class DeleteTarget:
    id: str | None = None
    query: str | None = None

    def __post_init__(self) -> None:
        if (self.id is None) == (self.query is None):
            raise ValueError("Delete requires exactly one of id or query")

    def to_wire(self) -> dict[str, str]:
        if self.id is not None:
            return {"id": self.id}
        return {"query": self.query or ""}


@dataclass(eq=False, slots=True)
class MutationEntry:
    """One staged operation. Entries compare by identity."""

    doc_type: type
    operation: MutationOperation
    payload: Any

    def to_wire(self, serializer: Serializer) -> dict[str, Any]:
        match self.operation:
            case MutationOperation.PATCH:
                body = self.payload.to_wire(serializer)
            case MutationOperation.DELETE:
                body = self.payload.to_wire()
            case _:
                body = serializer.dump(self.payload)
        return {str(self.operation): body}


@dataclass(frozen=True, slots=True)
class MutationPayload:
    """Serialised mutations together with the entries they were built from."""

    entries: tuple[MutationEntry, ...]
    mutations: list[dict[str, Any]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def to_wire(self) -> dict[str, Any]:
        return {"mutations": self.mutations}


class MutationBuilder:
    """Ordered queue of pending mutations for all document types of a context."""

    def __init__(self) -> None:
        self._entries: list[MutationEntry] = []
        self._lock = threading.RLock()

    def register(self, doc_type: type, operation: MutationOperation, payload: Any) -> MutationEntry:
        entry = MutationEntry(doc_type=doc_type, operation=operation, payload=payload)
        with self._lock:
            self._entries.append(entry)
        return entry

    @property
    def mutations(self) -> tuple[MutationEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def build(self, serializer: Serializer) -> MutationPayload:
        entries = self.mutations
        return _build_payload(entries, serializer)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def discard(self, entries: Iterable[MutationEntry]) -> None:
        """Remove exactly ``entries``; anything registered since stays queued."""

        committed = {id(entry) for entry in entries}
        with self._lock:
            self._entries[:] = [entry for entry in self._entries if id(entry) not in committed]

    def for_type(self, doc_type: type) -> ScopedMutationBuilder:
        return ScopedMutationBuilder(self, doc_type)

    def _select(self, doc_type: type) -> tuple[MutationEntry, ...]:
        with self._lock:
            return tuple(entry for entry in self._entries if entry.doc_type is doc_type)

    def _remove_type(self, doc_type: type) -> None:
        with self._lock:
            self._entries[:] = [entry for entry in self._entries if entry.doc_type is not doc_type]


class ScopedMutationBuilder:
    """View over the entries of one document type in a shared builder."""

    def __init__(self, root: MutationBuilder, doc_type: type) -> None:
        self._root = root
        self.doc_type = doc_type

    def register(self, operation: MutationOperation, payload: Any) -> MutationEntry:
        return self._root.register(self.doc_type, operation, payload)

    @property
    def mutations(self) -> tuple[MutationEntry, ...]:
        return self._root._select(self.doc_type)  # noqa: SLF001

    def __len__(self) -> int:
        return len(self.mutations)

    def build(self, serializer: Serializer) -> MutationPayload:
        return _build_payload(self.mutations, serializer)

    def clear(self) -> None:
        self._root._remove_type(self.doc_type)  # noqa: SLF001

    def discard(self, entries: Iterable[MutationEntry]) -> None:
        self._root.discard(entry for entry in entries if entry.doc_type is self.doc_type)


def _build_payload(entries: tuple[MutationEntry, ...], serializer: Serializer) -> MutationPayload:
    return MutationPayload(
        entries=entries,
        mutations=[entry.to_wire(serializer) for entry in entries],
    )
