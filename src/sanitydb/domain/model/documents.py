"""Base document model shared by every Sanity document type."""

from __future__ import annotations

import re
from datetime import datetime  # noqa: TC003
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

_FIRST_CAP = re.compile(r"^([A-Z]+)(?=[A-Z][a-z]|$)|^[A-Z]")


def default_type_name(cls: type) -> str:
    """``Article`` -> ``article``, ``BlogPost`` -> ``blogPost``, ``FAQEntry`` -> ``faqEntry``."""

    return _FIRST_CAP.sub(lambda match: match.group(0).lower(), cls.__name__, count=1)


class SanityModel(BaseModel):
    """Base for anything stored inside a Sanity document.

    Python attributes are snake_case; the wire form is camelCase. Unknown keys returned
    by the service are retained so that a read-modify-replace round trip keeps them.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class SanityDocument(SanityModel):
    """A document of any type.

    Subclasses name their ``_type`` with ``__sanity_type__``; when they do not, the class
    name is used with a lower-case first letter. The generic ``SanityDocument`` itself has
    no type name and stands for "every document in the dataset".
    """

    __sanity_type__: ClassVar[str | None] = None

    id: str | None = Field(default=None, alias="_id")
    type: str | None = Field(default=None, alias="_type")
    rev: str | None = Field(default=None, alias="_rev")
    created_at: datetime | None = Field(default=None, alias="_createdAt")
    updated_at: datetime | None = Field(default=None, alias="_updatedAt")

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "__sanity_type__" not in cls.__dict__:
            cls.__sanity_type__ = default_type_name(cls)

    @model_validator(mode="after")
    def _fill_type(self) -> Self:
        if self.type is None:
            self.type = type(self).__sanity_type__
        return self

    @property
    def is_draft(self) -> bool:
        return self.id is not None and self.id.startswith("drafts.")


def document_type_name(doc_type: type) -> str | None:
    """Return the ``_type`` value used to filter documents of ``doc_type``."""

    if isinstance(doc_type, type) and issubclass(doc_type, SanityDocument):
        return doc_type.__sanity_type__
    return default_type_name(doc_type)
