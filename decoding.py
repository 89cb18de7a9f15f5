"""Decode the first response candidate into the caller's target type."""

import collections.abc
import dataclasses
import json
import logging
from typing import Any, get_origin, is_typeddict

from google.genai import types

from errors import DecodeError, EmptyResponseError
from schemas import array_item_type, is_dataclass_type, is_pydantic_model, unwrap_type, wire_fields

logger = logging.getLogger(__name__)

_RAW_TARGETS = (None, Any, object, dict)


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", str(tp))


def hydrate(tp: Any, data: Any) -> Any:
    """Recursively convert decoded JSON into a dataclass, pydantic model or collection.

    ``None``, ``Any``, ``dict`` and TypedDict targets return the decoded value
    unchanged. Dataclass fields are read by their wire names.
    """
    tp = unwrap_type(tp)
    if data is None or tp in _RAW_TARGETS or get_origin(tp) in (dict, collections.abc.Mapping):
        return data

    if is_pydantic_model(tp):
        if not isinstance(data, dict):
            return tp.model_validate(data)
        # Wire names may be serialization aliases, which validation does not accept
        values = dict(data)
        for wf in wire_fields(tp):
            if wf.wire_name in data:
                del values[wf.wire_name]
                values[wf.name] = hydrate(wf.type, data[wf.wire_name])
        return tp.model_validate(values, by_name=True)

    if is_dataclass_type(tp):
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object for {tp.__name__}, got {type(data).__name__}")
        init_fields = {f.name for f in dataclasses.fields(tp) if f.init}
        kwargs = {}
        late = {}
        for wf in wire_fields(tp):
            if wf.wire_name not in data:
                continue
            value = hydrate(wf.type, data[wf.wire_name])
            if wf.name in init_fields:
                kwargs[wf.name] = value
            else:
                late[wf.name] = value
        obj = tp(**kwargs)
        # init=False fields are set after construction, frozen or not
        for name, value in late.items():
            object.__setattr__(obj, name, value)
        return obj

    if is_typeddict(tp):
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object for {tp.__name__}, got {type(data).__name__}")
        return data

    item_type = array_item_type(tp)
    if item_type is not None:
        if not isinstance(data, list):
            raise TypeError(f"Expected a JSON array for {_type_name(tp)}, got {type(data).__name__}")
        items = [hydrate(item_type, item) for item in data]
        container = get_origin(tp) or tp
        if container in (tuple, set, frozenset):
            return container(items)
        return items

    return data


def first_candidate_text(response: types.GenerateContentResponse) -> str:
    """Return the stripped text of the first part of the first candidate."""
    candidates = (response.candidates if response is not None else None) or []
    if not candidates:
        raise EmptyResponseError("No response received from model: no candidates")
    content = candidates[0].content
    if content is None or not content.parts:
        raise EmptyResponseError("No response received from model: first candidate has no content parts")
    return (content.parts[0].text or "").strip()


def decode_response(response: types.GenerateContentResponse, output_type: Any = dict) -> Any:
    """Decode the model response as JSON and hydrate it into output_type."""
    raw = first_candidate_text(response)
    logger.debug(f"[LLM] chars_out={len(raw)} target={_type_name(output_type)}")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Failed to unmarshal model output: {exc}", raw) from exc

    try:
        return hydrate(output_type, data)
    except (TypeError, ValueError) as exc:
        raise DecodeError(
            f"Model output does not fit {_type_name(output_type)}: {exc}", raw
        ) from exc
