"""Gemini response schemas: inference from Python types and parsing of raw documents."""

import collections.abc
import dataclasses
import inspect
import logging
from typing import Annotated, Any, Mapping, Optional, Union, get_args, get_origin, get_type_hints, is_typeddict

from google.genai import types
from pydantic import BaseModel, ValidationError

from errors import SchemaParseError

logger = logging.getLogger(__name__)

SchemaInput = Union[bytes, bytearray, str, Mapping[str, Any], types.Schema]

_UNION_ORIGINS = (Union, type(int | None))

_ARRAY_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
)


@dataclasses.dataclass(frozen=True)
class WireField:
    """A field visible on the wire: attribute name, JSON name, type and description."""
    name: str
    wire_name: str
    type: Any
    description: Optional[str] = None


def unwrap_type(tp: Any) -> Any:
    """Strip Optional/Annotated/InitVar wrappers down to the referenced type."""
    while True:
        if isinstance(tp, dataclasses.InitVar):
            tp = tp.type
            continue
        origin = get_origin(tp)
        if origin is Annotated:
            tp = get_args(tp)[0]
            continue
        if origin in _UNION_ORIGINS:
            args = [a for a in get_args(tp) if a is not type(None)]
            if len(args) == 1:
                tp = args[0]
                continue
        return tp


def _is_class(tp: Any) -> bool:
    # list[int] passes isinstance(..., type) on 3.10
    return isinstance(tp, type) and get_origin(tp) is None


def is_dataclass_type(tp: Any) -> bool:
    return _is_class(tp) and dataclasses.is_dataclass(tp)


def is_pydantic_model(tp: Any) -> bool:
    return _is_class(tp) and issubclass(tp, BaseModel)


def array_item_type(tp: Any) -> Optional[Any]:
    """Return the element type if tp is a collection type, else None.

    Bare collections (``list``) report ``Any`` as their element type.
    """
    origin = get_origin(tp)
    if origin in _ARRAY_ORIGINS:
        args = [a for a in get_args(tp) if a is not Ellipsis]
        return args[0] if args else Any
    if _is_class(tp) and tp in _ARRAY_ORIGINS:
        return Any
    return None


def _resolve_annotation(owner: type, name: str, annotation: Any) -> Any:
    """Evaluate one string annotation in the namespace of the class declaring it."""
    if not isinstance(annotation, str):
        return annotation
    holder = type(owner.__name__, (), {"__annotations__": {name: annotation}, "__module__": owner.__module__})
    try:
        return get_type_hints(holder, localns={owner.__name__: owner})[name]
    except (NameError, TypeError, SyntaxError) as exc:
        logger.debug(f"Could not resolve {owner.__name__}.{name}: {exc}")
        return annotation


def _resolved_hints(tp: type) -> dict[str, Any]:
    try:
        return get_type_hints(tp)
    except (NameError, TypeError) as exc:
        logger.debug(f"Resolving type hints of {tp.__name__} field by field: {exc}")

    # Only the fields that cannot be resolved keep their string annotation
    hints = {}
    for klass in reversed(tp.__mro__):
        for name, annotation in inspect.get_annotations(klass).items():
            hints[name] = _resolve_annotation(klass, name, annotation)
    return hints


def wire_fields(tp: Any) -> list[WireField]:
    """List the externally visible fields of a dataclass, pydantic model or TypedDict.

    Fields keep declaration order. A dataclass field's JSON name comes from
    ``field(metadata={"json": ...})``; ``"json": "-"`` or a leading underscore
    hides the field. Pydantic fields use their alias and honour ``exclude``.
    """
    result = []
    if is_dataclass_type(tp):
        hints = _resolved_hints(tp)
        for f in dataclasses.fields(tp):
            tag = f.metadata.get("json")
            if f.name.startswith("_") or tag == "-":
                continue
            result.append(WireField(
                name=f.name,
                wire_name=tag or f.name,
                type=hints.get(f.name, f.type),
                description=f.metadata.get("description"),
            ))
    elif is_pydantic_model(tp):
        for name, info in tp.model_fields.items():
            if name.startswith("_") or info.exclude:
                continue
            result.append(WireField(
                name=name,
                wire_name=info.serialization_alias or info.alias or name,
                type=info.annotation,
                description=info.description,
            ))
    elif is_typeddict(tp):
        for name, hint in _resolved_hints(tp).items():
            result.append(WireField(name=name, wire_name=name, type=hint))
    return result


def infer_schema(tp: Any) -> types.Schema:
    """Infer a response schema from a Python type.

    Structures become OBJECT nodes with every visible field required,
    collections become ARRAY nodes, and str/bool/int/float map to
    STRING/BOOLEAN/INTEGER/NUMBER. Anything else is a STRING.
    """
    tp = unwrap_type(tp)

    if is_dataclass_type(tp) or is_pydantic_model(tp) or is_typeddict(tp):
        properties = {}
        required = []
        for wf in wire_fields(tp):
            prop = infer_schema(wf.type)
            if wf.description:
                prop.description = wf.description
            properties[wf.wire_name] = prop
            required.append(wf.wire_name)
        return types.Schema(type=types.Type.OBJECT, properties=properties, required=required)

    item_type = array_item_type(tp)
    if item_type is not None:
        return types.Schema(type=types.Type.ARRAY, items=infer_schema(item_type))

    if _is_class(tp):
        # bool before int: bool is an int subclass
        if issubclass(tp, bool):
            return types.Schema(type=types.Type.BOOLEAN)
        if issubclass(tp, int):
            return types.Schema(type=types.Type.INTEGER)
        if issubclass(tp, float):
            return types.Schema(type=types.Type.NUMBER)

    return types.Schema(type=types.Type.STRING)


def parse_schema(raw: SchemaInput) -> types.Schema:
    """Parse a raw schema document (JSON text, bytes or mapping) into a Schema."""
    if isinstance(raw, types.Schema):
        return raw
    try:
        if isinstance(raw, (bytes, bytearray, str)):
            return types.Schema.model_validate_json(raw)
        if isinstance(raw, Mapping):
            return types.Schema.model_validate(dict(raw))
    except ValidationError as exc:
        raise SchemaParseError(f"Failed to parse schema JSON: {exc}") from exc
    raise SchemaParseError(f"Unsupported schema document type: {type(raw).__name__}")


def resolve_schema(schema: Optional[SchemaInput], output_type: Any) -> types.Schema:
    """Use the explicit schema when given, otherwise infer one from the output type."""
    if schema is not None:
        return parse_schema(schema)
    return infer_schema(output_type)


def schema_to_dict(schema: types.Schema) -> dict:
    """Render a Schema in its JSON wire form, leaving out unset fields."""
    return schema.model_dump(mode="json", exclude_none=True)
