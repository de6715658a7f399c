"""Composition of the GROQ strings document sets send.

Only string assembly happens here: a type constraint, an optional caller filter, an
ordering, a slice and a projection. Filters, orderings and projections are GROQ
fragments written by the caller and are not parsed.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


def type_filter(type_name: str | None) -> str | None:
    if type_name is None:
        return None
    return f"_type == {json.dumps(type_name)}"


@dataclass(frozen=True, slots=True)
class QuerySpec:
    type_name: str | None = None
    filter: str | None = None
    order: Sequence[str] = ()
    offset: int = 0
    limit: int | None = None
    projection: str | None = None

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("offset must not be negative")
        if self.limit is not None and self.limit < 0:
            raise ValueError("limit must not be negative")

    def constraints(self) -> str:
        parts = [part for part in (type_filter(self.type_name), self.filter) if part]
        if not parts:
            return "*"
        if len(parts) == 1:
            return f"*[{parts[0]}]"
        return "*[" + " && ".join(f"({part})" for part in parts) + "]"

    def to_groq(self) -> str:
        query = self.constraints()
        if self.order:
            query += f" | order({', '.join(self.order)})"
        if self.limit is not None:
            query += f"[{self.offset}...{self.offset + self.limit}]"
        elif self.offset:
            # GROQ has no open-ended slice
            query += f"[{self.offset}...{_UNBOUNDED_SLICE_END}]"
        if self.projection:
            query += f" {self.projection}"
        return query

    def single(self) -> str:
        query = self.constraints()
        if self.order:
            query += f" | order({', '.join(self.order)})"
        query += f"[{self.offset}]"
        if self.projection:
            query += f" {self.projection}"
        return query

    def count(self) -> str:
        return f"count({self.constraints()})"


_UNBOUNDED_SLICE_END = 2**31 - 1
