"""Translate Sanity API payloads into mutation responses."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sanitydb.domain.ports.client import (
    DocumentMutationResponse,
    DocumentMutationResult,
    MutationResponse,
    MutationResult,
)

from .schema import MutationResponsePayload

if TYPE_CHECKING:
    from .serialization import Serializer


def parse_mutation_response(payload: object) -> MutationResponse:
    validated = MutationResponsePayload.model_validate(payload)
    return MutationResponse(
        transaction_id=validated.transaction_id,
        results=tuple(
            MutationResult(id=result.id, operation=result.operation, document=result.document)
            for result in validated.results
        ),
    )


def narrow_mutation_response[TDoc](
    response: MutationResponse,
    doc_type: type[TDoc],
    serializer: Serializer,
) -> DocumentMutationResponse[TDoc]:
    """Materialise returned documents as ``doc_type``."""

    return DocumentMutationResponse(
        doc_type=doc_type,
        transaction_id=response.transaction_id,
        results=tuple(
            DocumentMutationResult(
                id=result.id,
                operation=result.operation,
                document=(
                    serializer.load(doc_type, result.document)
                    if result.document is not None
                    else None
                ),
            )
            for result in response.results
        ),
    )
