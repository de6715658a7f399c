"""Typed references between documents."""

from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

from .documents import SanityDocument


class SanityReference[TDoc: SanityDocument](BaseModel):
    """Reference to another document, written as ``{"_type": "reference", "_ref": ...}``.

    A query that dereferences the field (``author->``) returns the whole target document
    in place of the reference. That shape is accepted too: ``ref`` takes the target's
    ``_id`` and ``value`` holds the materialised document. Only the reference shape is
    ever serialised, so a dereferenced document can be written back unchanged.
    """

    model_config = ConfigDict(populate_by_name=True)

    ref: str = Field(alias="_ref")
    type: Literal["reference"] = Field(default="reference", alias="_type")
    key: str | None = Field(default=None, alias="_key")
    weak: bool | None = Field(default=None, alias="_weak")
    value: TDoc | None = Field(default=None, exclude=True)

    @classmethod
    def to(cls, document: SanityDocument, *, weak: bool | None = None) -> Self:
        if document.id is None:
            raise ValueError("Cannot reference a document without an id")
        return cls(ref=document.id, weak=weak, value=document)

    @model_validator(mode="before")
    @classmethod
    def _accept_dereferenced(cls, data: Any) -> Any:
        if isinstance(data, SanityReference) and not isinstance(data, cls):
            return {"_ref": data.ref, "_key": data.key, "_weak": data.weak, "value": data.value}
        if isinstance(data, SanityDocument):
            return {"_ref": data.id, "value": data}
        if isinstance(data, dict) and "_ref" not in data and "ref" not in data and "_id" in data:
            return {"_ref": data["_id"], "value": data}
        return data

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"_type": "reference", "_ref": self.ref}
        if self.key is not None:
            payload["_key"] = self.key
        if self.weak is not None:
            payload["_weak"] = self.weak
        return payload
