"""Data context: the unit of work over a Sanity dataset."""

from __future__ import annotations

import threading
from logging import getLogger
from typing import TYPE_CHECKING, Any, Literal, cast, overload

from sanitydb.adapters.sanity import DEFAULT_SERIALIZER, SanityClient
from sanitydb.config.errors import ConfigurationError
from sanitydb.domain.document_set import DocumentSet
from sanitydb.domain.errors import EmptyCommitError
from sanitydb.domain.model import SanityDocument, SanityFileAsset, SanityImageAsset
from sanitydb.domain.mutations import MutationBuilder
from sanitydb.domain.ports.client import MutationResponse, MutationVisibility

if TYPE_CHECKING:
    from types import TracebackType

    from sanitydb.adapters.sanity import Serializer
    from sanitydb.config.sanity import SanityOptions
    from sanitydb.domain.ports.client import DocumentMutationResponse, RemoteClient

log = getLogger(__name__)


class DataContext:
    """Unit of work over one Sanity dataset.

    Document sets are created on first access and cached, one per document type. Writes
    staged on any of them land in the context's single mutation builder, which
    ``commit()`` (everything) or ``commit_for()`` (one type) sends as a transaction.
    Staged mutations are removed only after the service acknowledged them.

    ``shared`` marks a context that several consumers use concurrently. Access to the
    document-set cache and to the mutation queue is locked either way.
    """

    def __init__(
        self,
        options: SanityOptions | None,
        serializer: Serializer | None = None,
        *,
        shared: bool = False,
        client: RemoteClient | None = None,
    ) -> None:
        if options is None:
            raise ConfigurationError("DataContext requires SanityOptions")
        self.options = options.validate()
        self._serializer = serializer or DEFAULT_SERIALIZER
        self._client: RemoteClient = client or SanityClient(
            self.options, serializer=self._serializer
        )
        self._mutations = MutationBuilder()
        self._is_shared = shared
        self._document_sets: dict[type, DocumentSet[Any]] = {}
        self._document_sets_lock = threading.Lock()

    @property
    def client(self) -> RemoteClient:
        return self._client

    @property
    def mutations(self) -> MutationBuilder:
        return self._mutations

    @property
    def serializer(self) -> Serializer:
        return self._serializer

    @property
    def is_shared(self) -> bool:
        return self._is_shared

    async def __aenter__(self) -> DataContext:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False  # don't swallow exceptions

    def document_set[TDoc](self, doc_type: type[TDoc]) -> DocumentSet[TDoc]:
        with self._document_sets_lock:
            document_set = self._document_sets.get(doc_type)
            if document_set is None:
                document_set = DocumentSet(self, doc_type)
                self._document_sets[doc_type] = document_set
        return cast("DocumentSet[TDoc]", document_set)

    @property
    def documents(self) -> DocumentSet[SanityDocument]:
        return self.document_set(SanityDocument)

    @property
    def images(self) -> DocumentSet[SanityImageAsset]:
        return self.document_set(SanityImageAsset)

    @property
    def files(self) -> DocumentSet[SanityFileAsset]:
        return self.document_set(SanityFileAsset)

    def clear_changes(self) -> None:
        self._mutations.clear()

    rollback = clear_changes

    async def commit(
        self,
        *,
        return_ids: bool = False,
        return_documents: bool = False,
        visibility: MutationVisibility = MutationVisibility.SYNC,
    ) -> MutationResponse:
        """Send every staged mutation as one transaction.

        Nothing is sent when nothing is staged; an empty response is returned instead.
        On failure the exception propagates and the staged mutations stay queued.
        """

        payload = self._mutations.build(self._serializer)
        if not payload:
            log.debug("Nothing to commit")
            return MutationResponse()

        response = await self._client.commit_mutations(
            payload,
            return_ids=return_ids,
            return_documents=return_documents,
            visibility=visibility,
        )
        self._mutations.discard(payload.entries)
        log.debug("Committed %d mutations (transaction %s)", len(payload), response.transaction_id)
        return response

    async def commit_for[TDoc](
        self,
        doc_type: type[TDoc],
        *,
        return_ids: bool = False,
        return_documents: bool = False,
        visibility: MutationVisibility = MutationVisibility.SYNC,
    ) -> DocumentMutationResponse[TDoc]:
        """Send the mutations staged for ``doc_type`` as one transaction.

        Raises ``EmptyCommitError`` without contacting the service when nothing is
        staged for the type. Mutations of other types are left untouched.
        """

        scoped = self._mutations.for_type(doc_type)
        payload = scoped.build(self._serializer)
        if not payload:
            raise EmptyCommitError(doc_type)

        response = await self._client.commit_mutations_for(
            doc_type,
            payload,
            return_ids=return_ids,
            return_documents=return_documents,
            visibility=visibility,
        )
        scoped.discard(payload.entries)
        log.debug(
            "Committed %d %s mutations (transaction %s)",
            len(payload),
            doc_type.__qualname__,
            response.transaction_id,
        )
        return response


class DocumentSetDescriptor[TDoc]:
    """Declares a document set as a class attribute of a ``DataContext`` subclass.

    >>> class BlogContext(DataContext):
    ...     articles = DocumentSetDescriptor(Article)
    """

    def __init__(self, doc_type: type[TDoc]) -> None:
        self.doc_type = doc_type

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @overload
    def __get__(self, instance: None, owner: type) -> DocumentSetDescriptor[TDoc]: ...

    @overload
    def __get__(self, instance: DataContext, owner: type) -> DocumentSet[TDoc]: ...

    def __get__(
        self, instance: DataContext | None, owner: type
    ) -> DocumentSet[TDoc] | DocumentSetDescriptor[TDoc]:
        if instance is None:
            return self
        return instance.document_set(self.doc_type)
