"""
Schema constructors backed by pydantic.

A schema is any annotation pydantic can validate against: a strict scalar
type, `list[...]`, `Annotated[...]`, `Any`, or a generated `BaseModel`
subclass. Custom type factories and modifiers receive and return values of
this same shape, so they can compose with `Annotated` and `Field` freely.
"""

import keyword
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Any

from pydantic import AllowInfNan, BaseModel, ConfigDict, Field, Strict, StrictBool, StrictStr, TypeAdapter, create_model

Schema = Any

NumberSchema = Annotated[float, Strict(), AllowInfNan(False)]

# Exact-match names, looked up before any registry
BASIC_TYPE_SCHEMAS: dict[str, Schema] = {
    "any": Any,
    "string": StrictStr,
    "number": NumberSchema,
    "boolean": StrictBool,
    "Object": dict[str, Any],
    "false": StrictBool,
    "true": StrictBool,
    "Date": datetime,
}

_OBJECT_CONFIG = ConfigDict(extra="forbid", protected_namespaces=())


@dataclass(frozen=True)
class FieldSchema:
    """A schema tagged with whether its key must be present."""

    schema: Schema
    required: bool = True


def any_schema() -> Schema:
    return Any


def array_of(item_schema: Schema) -> Schema:
    return list[item_schema]


def required(schema: Schema) -> FieldSchema:
    return FieldSchema(schema=schema, required=True)


def optional(schema: Schema) -> FieldSchema:
    return FieldSchema(schema=schema, required=False)


def _attribute_name(key: str, index: int) -> str:
    """Pick a model attribute name for a property key; the key itself stays the alias."""
    if (
        key.isidentifier()
        and not keyword.iskeyword(key)
        and not key.startswith("_")
        and not hasattr(BaseModel, key)
    ):
        return key
    return f"field_{index}"


def object_of(model_name: str, fields: dict[str, FieldSchema]) -> type[BaseModel]:
    """
    Build a model accepting exactly the given keys.

    Unknown keys are rejected. Optional keys may be omitted but, when present,
    must still match their schema.

    Args:
        model_name: Name of the generated model class
        fields: Property key -> FieldSchema, in declaration order

    Returns:
        A new BaseModel subclass
    """
    definitions: dict[str, Any] = {}
    for index, (key, field_schema) in enumerate(fields.items()):
        attribute = _attribute_name(key, index)
        while attribute in definitions:
            attribute = f"{attribute}_{index}"
        if field_schema.required:
            info = Field(alias=key)
        else:
            info = Field(default=None, alias=key)
        definitions[attribute] = (field_schema.schema, info)

    return create_model(model_name, __config__=_OBJECT_CONFIG, **definitions)


def schema_adapter(schema: Schema) -> TypeAdapter:
    """Wrap any schema so it can validate values and emit JSON Schema."""
    return TypeAdapter(schema)


def validate(schema: Schema, value: Any) -> Any:
    """Validate a value against a schema, raising pydantic.ValidationError on mismatch."""
    return schema_adapter(schema).validate_python(value)


def to_json_schema(schema: Schema) -> dict[str, Any]:
    return schema_adapter(schema).json_schema(by_alias=True)
