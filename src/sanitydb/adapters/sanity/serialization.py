"""Conversion between document objects and the JSON the Sanity API speaks."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, cast

from pydantic import BaseModel, TypeAdapter
from pydantic.alias_generators import to_camel
from pydantic_core import to_jsonable_python

type Converter = Callable[[Any], object]


def _camelize_key(key: str) -> str:
    # system keys (_id, _type, _ref, ...) and GROQ paths keep their spelling
    if key.startswith("_") or "." in key or "[" in key:
        return key
    return to_camel(key)


@dataclass(frozen=True, slots=True)
class Serializer:
    """Serializer settings used for outgoing mutations and incoming documents.

    ``camel_case`` renames plain-dict keys (pydantic documents already carry camelCase
    aliases) and ``omit_nulls`` drops ``None`` values. ``converters`` turn values of a
    given type into JSON-compatible ones before anything else happens, at any depth,
    including fields of nested documents and references.
    """

    camel_case: bool = True
    omit_nulls: bool = True
    converters: Mapping[type, Converter] = field(default_factory=dict)

    def dump(self, document: object) -> dict[str, Any]:
        value = self.dump_value(document)
        if not isinstance(value, dict):
            raise TypeError(f"Documents must serialise to a JSON object, got {type(value).__name__}")
        return cast("dict[str, Any]", value)

    def dump_value(self, value: object) -> Any:
        return self._to_json(value, rename=self.camel_case)

    def load[T](self, doc_type: type[T], payload: Any) -> T:
        if isinstance(doc_type, type) and issubclass(doc_type, BaseModel):
            return cast("T", doc_type.model_validate(payload))
        return TypeAdapter(doc_type).validate_python(payload)

    def load_many[T](self, doc_type: type[T], payload: Any) -> list[T]:
        if payload is None:
            return []
        if not isinstance(payload, list):
            payload = [payload]
        return [self.load(doc_type, item) for item in cast("list[Any]", payload)]

    def _convert(self, value: object) -> object:
        for kind, converter in self.converters.items():
            if isinstance(value, kind):
                return converter(value)
        return value

    def _to_json(self, value: object, *, rename: bool) -> Any:
        value = self._convert(value)
        if isinstance(value, BaseModel):
            # models carry their own wire names
            return self._to_json(self._model_fields(value), rename=False)
        if isinstance(value, Mapping):
            items = cast("Mapping[str, object]", value).items()
            return {
                (_camelize_key(key) if rename else key): self._to_json(item, rename=rename)
                for key, item in items
                if not (self.omit_nulls and item is None)
            }
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self._to_json(item, rename=rename) for item in cast("list[object]", value)]
        return to_jsonable_python(value)

    def _model_fields(self, model: BaseModel) -> dict[str, object]:
        model_type = type(model)
        if model_type.__pydantic_decorators__.model_serializers:
            # the model defines its own wire shape
            return model.model_dump(mode="python", by_alias=True, exclude_none=self.omit_nulls)
        fields: dict[str, object] = {}
        for name, info in model_type.model_fields.items():
            if info.exclude:
                continue
            fields[info.serialization_alias or info.alias or name] = getattr(model, name)
        fields.update(model.model_extra or {})
        return fields


DEFAULT_SERIALIZER = Serializer()
