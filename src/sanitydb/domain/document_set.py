"""Typed read/write facade over one document type."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, cast

from sanitydb.domain.model import document_type_name
from sanitydb.domain.mutations import DeleteTarget, MutationOperation, Patch
from sanitydb.domain.ports.client import MutationVisibility
from sanitydb.domain.query import QuerySpec

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sanitydb.domain.mutations import MutationBuilder, MutationEntry, ScopedMutationBuilder
    from sanitydb.domain.ports.client import DocumentMutationResponse, RemoteClient


class DocumentSetOwner(Protocol):
    """What a document set needs from the context that created it."""

    @property
    def client(self) -> RemoteClient: ...

    @property
    def mutations(self) -> MutationBuilder: ...

    async def commit_for[TDoc](
        self,
        doc_type: type[TDoc],
        *,
        return_ids: bool = False,
        return_documents: bool = False,
        visibility: MutationVisibility = MutationVisibility.SYNC,
    ) -> DocumentMutationResponse[TDoc]: ...


class DocumentSet[TDoc]:
    """Documents of one type reachable through a data context.

    Reads go to the remote service. Writes are staged in the context's mutation builder
    and only leave the process on commit.
    """

    def __init__(self, context: DocumentSetOwner, doc_type: type[TDoc]) -> None:
        self._context = context
        self.doc_type = doc_type
        self.type_name = document_type_name(doc_type)

    def __repr__(self) -> str:
        return f"DocumentSet[{self.doc_type.__qualname__}]"

    @property
    def _staged(self) -> ScopedMutationBuilder:
        return self._context.mutations.for_type(self.doc_type)

    async def fetch(
        self,
        filter: str | None = None,  # noqa: A002
        *,
        params: Mapping[str, Any] | None = None,
        order: Sequence[str] | str = (),
        offset: int = 0,
        limit: int | None = None,
        projection: str | None = None,
    ) -> list[TDoc]:
        spec = QuerySpec(
            type_name=self.type_name,
            filter=filter,
            order=(order,) if isinstance(order, str) else tuple(order),
            offset=offset,
            limit=limit,
            projection=projection,
        )
        return await self._context.client.fetch(self.doc_type, spec.to_groq(), params)

    async def first(
        self,
        filter: str | None = None,  # noqa: A002
        *,
        params: Mapping[str, Any] | None = None,
        order: Sequence[str] | str = (),
        projection: str | None = None,
    ) -> TDoc | None:
        documents = await self.fetch(
            filter, params=params, order=order, limit=1, projection=projection
        )
        return documents[0] if documents else None

    async def get(self, document_id: str) -> TDoc | None:
        spec = QuerySpec(type_name=self.type_name, filter="_id == $id")
        documents = await self._context.client.fetch(
            self.doc_type, spec.single(), {"id": document_id}
        )
        return documents[0] if documents else None

    async def count(
        self,
        filter: str | None = None,  # noqa: A002
        *,
        params: Mapping[str, Any] | None = None,
    ) -> int:
        spec = QuerySpec(type_name=self.type_name, filter=filter)
        result = await self._context.client.execute_query(spec.count(), params)
        return int(result or 0)

    async def query(self, groq: str, params: Mapping[str, Any] | None = None) -> list[TDoc]:
        """Run a hand-written GROQ query and materialise the result as documents."""

        return await self._context.client.fetch(self.doc_type, groq, params)

    def create(self, document: TDoc) -> MutationEntry:
        return self._staged.register(MutationOperation.CREATE, self._checked(document))

    def create_or_replace(self, document: TDoc) -> MutationEntry:
        return self._staged.register(
            MutationOperation.CREATE_OR_REPLACE, self._checked(document, require_id=True)
        )

    update = create_or_replace

    def create_if_not_exists(self, document: TDoc) -> MutationEntry:
        return self._staged.register(
            MutationOperation.CREATE_IF_NOT_EXISTS, self._checked(document, require_id=True)
        )

    def delete(self, document_id: str) -> MutationEntry:
        return self._staged.register(MutationOperation.DELETE, DeleteTarget(id=document_id))

    def delete_by_query(self, groq: str) -> MutationEntry:
        return self._staged.register(MutationOperation.DELETE, DeleteTarget(query=groq))

    def patch(
        self,
        document_id: str,
        *,
        set: Mapping[str, Any] | None = None,  # noqa: A002
        set_if_missing: Mapping[str, Any] | None = None,
        unset: Sequence[str] = (),
        inc: Mapping[str, int | float] | None = None,
        dec: Mapping[str, int | float] | None = None,
        insert: Mapping[str, Any] | None = None,
        if_revision_id: str | None = None,
    ) -> MutationEntry:
        return self.stage_patch(
            Patch(
                id=document_id,
                set=set,
                set_if_missing=set_if_missing,
                unset=tuple(unset),
                inc=inc,
                dec=dec,
                insert=insert,
                if_revision_id=if_revision_id,
            )
        )

    def patch_by_query(
        self,
        groq: str,
        *,
        set: Mapping[str, Any] | None = None,  # noqa: A002
        set_if_missing: Mapping[str, Any] | None = None,
        unset: Sequence[str] = (),
        inc: Mapping[str, int | float] | None = None,
        dec: Mapping[str, int | float] | None = None,
        insert: Mapping[str, Any] | None = None,
    ) -> MutationEntry:
        return self.stage_patch(
            Patch(
                query=groq,
                set=set,
                set_if_missing=set_if_missing,
                unset=tuple(unset),
                inc=inc,
                dec=dec,
                insert=insert,
            )
        )

    def stage_patch(self, patch: Patch) -> MutationEntry:
        if patch.is_empty:
            raise ValueError("Patch has no operations")
        return self._staged.register(MutationOperation.PATCH, patch)

    @property
    def pending(self) -> tuple[MutationEntry, ...]:
        return self._staged.mutations

    def clear_changes(self) -> None:
        self._staged.clear()

    async def commit(
        self,
        *,
        return_ids: bool = False,
        return_documents: bool = False,
        visibility: MutationVisibility = MutationVisibility.SYNC,
    ) -> DocumentMutationResponse[TDoc]:
        return await self._context.commit_for(
            self.doc_type,
            return_ids=return_ids,
            return_documents=return_documents,
            visibility=visibility,
        )

    def _checked(self, document: TDoc, *, require_id: bool = False) -> TDoc:
        expected = self.doc_type
        if isinstance(expected, type) and not isinstance(document, expected):
            raise TypeError(
                f"{self!r} cannot stage a {type(document).__qualname__}; "
                f"expected {expected.__qualname__}"
            )
        if require_id and _document_id(document) is None:
            raise ValueError(f"{self!r}: document id is required for this operation")
        return document


def _document_id(document: object) -> str | None:
    if isinstance(document, Mapping):
        return cast("Mapping[str, Any]", document).get("_id")
    return getattr(document, "id", None)
