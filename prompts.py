"""Few-shot example fragments and task-text templates for structured generation."""

import dataclasses
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import BaseModel

from config import JSON_INDENT
from schemas import wire_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptExample:
    prompt: str
    response: Any   # expected structured output


@dataclass(frozen=True)
class RelationExample:
    relation_record_json: Any   # input record, JSON text or a JSON-able value
    response: Any


Example = Union[PromptExample, RelationExample]
ExampleGroups = Mapping[str, Sequence[Example]]


def to_jsonable(value: Any) -> Any:
    """Convert dataclasses and pydantic models to plain JSON values under their wire names."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            wf.wire_name: to_jsonable(getattr(value, wf.name))
            for wf in wire_fields(type(value))
        }
    if isinstance(value, Mapping):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    return value


def pretty_json(value: Any) -> str:
    """Pretty-print an expected response; unserializable values give an empty body."""
    try:
        return json.dumps(to_jsonable(value), ensure_ascii=False, indent=JSON_INDENT)
    except (TypeError, ValueError) as exc:
        logger.warning(f"Could not serialize example response, using empty body: {exc}")
        return ""


def record_to_json(record: Any) -> str:
    """Render an input record as JSON text; strings are passed through as-is."""
    if isinstance(record, (str, bytes)):
        return record.decode("utf-8") if isinstance(record, bytes) else record
    return json.dumps(to_jsonable(record), ensure_ascii=False)


def format_example(example: Example) -> str:
    """Render one few-shot example as a prompt fragment."""
    if isinstance(example, PromptExample):
        expected = pretty_json(example.response)
        return f"Example prompt: {example.prompt}\nExpected JSON: {expected}"
    if isinstance(example, RelationExample):
        expected = pretty_json(example.response)
        record = record_to_json(example.relation_record_json)
        return f"Example Input JSON: {record}\nExpected JSON: {expected}"
    raise TypeError(f"Unsupported example type: {type(example).__name__}")


def format_category_header(category: str) -> str:
    return f"\n--- Categorized Example Group For Category :{category} ---\n"


def append_example_fragments(
    fragments: list[str],
    examples: Sequence[Example] = (),
    categorized_examples: Optional[ExampleGroups] = None,
) -> list[str]:
    """Append flat examples, then each category (sorted by label) with its header.

    Mutates and returns ``fragments``.
    """
    for example in examples:
        fragments.append(format_example(example))

    for category in sorted(categorized_examples or {}):
        fragments.append(format_category_header(category))
        for example in categorized_examples[category]:
            fragments.append(format_example(example))

    return fragments


def build_relation_task(entity: str, context: str, record: Any) -> str:
    """Build the task text for generating a record from an input JSON record."""
    return (
        f"Task: Generate a {entity} record based on the provided input JSON.\n"
        f"Context: {context}\n"
        f"Input JSON: {record_to_json(record)}"
    )


def build_file_task(entity: str, context: str) -> str:
    """Build the task text for generating a record from file content."""
    return (
        f"Task: Generate a {entity} record based on the provided file content.\n"
        f"Context: {context}"
    )
