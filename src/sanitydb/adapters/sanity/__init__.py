"""Sanity HTTP API adapter."""

from __future__ import annotations

from .client import (
    MAX_GET_QUERY_LENGTH,
    ClientFactory,
    SanityAPIError,
    SanityClient,
    encode_query_params,
)
from .schema import ErrorResponse, MutationResponsePayload, QueryResponse
from .serialization import DEFAULT_SERIALIZER, Converter, Serializer
from .translator import narrow_mutation_response, parse_mutation_response

__all__ = [
    "DEFAULT_SERIALIZER",
    "MAX_GET_QUERY_LENGTH",
    "ClientFactory",
    "Converter",
    "ErrorResponse",
    "MutationResponsePayload",
    "QueryResponse",
    "SanityAPIError",
    "SanityClient",
    "Serializer",
    "encode_query_params",
    "narrow_mutation_response",
    "parse_mutation_response",
]
