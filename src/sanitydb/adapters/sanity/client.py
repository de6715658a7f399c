"""HTTP client for the Sanity data API."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, Any, Final, Protocol

import httpx
from pydantic import ValidationError

from sanitydb.adapters.http_resilience import ResilientClient, build_limiter
from sanitydb.domain.ports.client import MutationVisibility

from .schema import ErrorResponse, QueryResponse
from .serialization import DEFAULT_SERIALIZER, Serializer
from .translator import narrow_mutation_response, parse_mutation_response

if TYPE_CHECKING:
    from collections.abc import Mapping

    from aiolimiter import AsyncLimiter

    from sanitydb.config.http_resilience import ResilienceConfig
    from sanitydb.config.sanity import SanityOptions
    from sanitydb.domain.mutations import MutationPayload
    from sanitydb.domain.ports.client import DocumentMutationResponse, MutationResponse

log = getLogger(__name__)

# Longer query strings are sent as a POST body instead of URL parameters.
MAX_GET_QUERY_LENGTH: Final[int] = 11264


class ClientFactory(Protocol):
    def __call__(
        self, config: ResilienceConfig, *, limiter: AsyncLimiter | None = None
    ) -> ResilientClient: ...


class SanityAPIError(RuntimeError):
    """Raised when the Sanity API answers with an error status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_type: str | None = None,
        payload: object = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_type = error_type
        self.payload = payload


def encode_query_params(
    query: str,
    params: Mapping[str, Any] | None,
    serializer: Serializer,
) -> dict[str, str]:
    """GROQ parameters travel as ``$name=<json>`` next to the query itself."""

    encoded = {"query": query}
    for name, value in (params or {}).items():
        encoded[f"${name.removeprefix('$')}"] = json.dumps(serializer.dump_value(value))
    return encoded


class SanityClient:
    """Queries and mutations against one Sanity project dataset.

    Every call opens a short-lived resilient client from ``client_factory``. The rate
    limiter lives here so that it spans all of those calls.
    """

    def __init__(
        self,
        options: SanityOptions,
        *,
        serializer: Serializer | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.options = options.validate()
        self.serializer = serializer or DEFAULT_SERIALIZER
        self._resilience = options.resilience
        self._client_factory: ClientFactory = client_factory or ResilientClient
        self._limiter = build_limiter(self._resilience.ratelimit)

    @property
    def query_url(self) -> str:
        return f"{self.options.api_url(cdn=self.options.use_cdn)}/data/query/{self.options.dataset}"

    @property
    def mutate_url(self) -> str:
        # mutations never go through the CDN
        return f"{self.options.api_url()}/data/mutate/{self.options.dataset}"

    async def execute_query(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        query_params = encode_query_params(query, params, self.serializer)
        async with self._client_factory(self._resilience, limiter=self._limiter) as client:
            if len(str(httpx.QueryParams(query_params))) > MAX_GET_QUERY_LENGTH:
                body = {
                    "query": query,
                    "params": {
                        name.removeprefix("$"): self.serializer.dump_value(value)
                        for name, value in (params or {}).items()
                    },
                }
                response = await client.post(self.query_url, json=body, headers=self._headers())
            else:
                response = await client.get(
                    self.query_url, params=query_params, headers=self._headers()
                )
        payload = self._decode(response)
        return QueryResponse.model_validate(payload).result

    async def fetch[TDoc](
        self,
        doc_type: type[TDoc],
        query: str,
        params: Mapping[str, Any] | None = None,
    ) -> list[TDoc]:
        result = await self.execute_query(query, params)
        return self.serializer.load_many(doc_type, result)

    async def commit_mutations(
        self,
        payload: MutationPayload,
        *,
        return_ids: bool = False,
        return_documents: bool = False,
        visibility: MutationVisibility = MutationVisibility.SYNC,
    ) -> MutationResponse:
        query_params = {
            "returnIds": _flag(return_ids),
            "returnDocuments": _flag(return_documents),
            "visibility": str(visibility),
        }
        log.debug(
            "Sending %d mutations to %s/%s (visibility=%s)",
            len(payload),
            self.options.project_id,
            self.options.dataset,
            visibility,
        )
        async with self._client_factory(self._resilience, limiter=self._limiter) as client:
            response = await client.post(
                self.mutate_url,
                params=query_params,
                json=payload.to_wire(),
                headers=self._headers(),
            )
        return parse_mutation_response(self._decode(response))

    async def commit_mutations_for[TDoc](
        self,
        doc_type: type[TDoc],
        payload: MutationPayload,
        *,
        return_ids: bool = False,
        return_documents: bool = False,
        visibility: MutationVisibility = MutationVisibility.SYNC,
    ) -> DocumentMutationResponse[TDoc]:
        response = await self.commit_mutations(
            payload,
            return_ids=return_ids,
            return_documents=return_documents,
            visibility=visibility,
        )
        return narrow_mutation_response(response, doc_type, self.serializer)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.options.token:
            headers["Authorization"] = f"Bearer {self.options.token}"
        return headers

    def _decode(self, response: httpx.Response) -> Any:
        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except json.JSONDecodeError:
            body = None
        error = _parse_error(body, fallback=response.text)
        log.error(
            "Sanity API error %s (%s): %s",
            response.status_code,
            error.error_type,
            error.description,
        )
        raise SanityAPIError(
            error.description,
            status_code=response.status_code,
            error_type=error.error_type,
            payload=body,
        )


def _parse_error(body: object, *, fallback: str) -> ErrorResponse:
    if isinstance(body, dict):
        try:
            return ErrorResponse.model_validate(body)
        except ValidationError:
            log.debug("Unrecognised Sanity error payload: %r", body)
    return ErrorResponse(message=fallback or None)


def _flag(value: bool) -> str:  # noqa: FBT001
    return "true" if value else "false"
