"""Generator variants: prompt-driven, relation-record-driven and file-driven."""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from google.genai import types

from config import (
    ATTACHMENT_MIME_PREFIXES,
    ATTACHMENT_MIME_TYPES,
    DEFAULT_TEMPERATURE,
    DEFAULT_TEXT_CHARSET,
    INLINE_TEXT_MIME_PREFIXES,
    INLINE_TEXT_MIME_TYPES,
)
from errors import FileDecodeError, UnsupportedFileTypeError
from llm_client import GenerateContentFunc, build_contents, build_generation_config, execute_llm_call
from prompts import (
    ExampleGroups,
    PromptExample,
    RelationExample,
    append_example_fragments,
    build_file_task,
    build_relation_task,
)
from schemas import SchemaInput, resolve_schema

logger = logging.getLogger(__name__)


def _split_mime_type(mime_type: str) -> tuple[str, str]:
    """Split ``text/plain; charset=latin-1`` into its base type and charset."""
    base, *params = mime_type.split(";")
    charset = DEFAULT_TEXT_CHARSET
    for param in params:
        key, _, value = param.partition("=")
        if key.strip().lower() == "charset" and value.strip():
            charset = value.strip().strip('"')
    return base.strip().lower(), charset


def file_adapter(data: bytes, mime_type: str) -> tuple[Optional[str], Optional[types.Part]]:
    """Route file bytes as inline text or as a binary attachment part.

    Returns (text, None) for text-like types and (None, part) for images
    and PDFs. Text is decoded strictly in the charset named by the MIME
    type, UTF-8 when none is given.
    """
    base, charset = _split_mime_type(mime_type)
    if base.startswith(INLINE_TEXT_MIME_PREFIXES) or base in INLINE_TEXT_MIME_TYPES:
        try:
            return data.decode(charset), None
        except (UnicodeDecodeError, LookupError) as exc:
            raise FileDecodeError(mime_type, charset, str(exc)) from exc
    if base.startswith(ATTACHMENT_MIME_PREFIXES) or base in ATTACHMENT_MIME_TYPES:
        return None, types.Part.from_bytes(data=data, mime_type=mime_type)
    raise UnsupportedFileTypeError(mime_type)


@dataclass
class Generator:
    """Shared request pipeline; subclasses only build the task text."""
    instructions: str = ""
    examples: Sequence[Any] = ()
    categorized_examples: Optional[ExampleGroups] = None
    schema: Optional[SchemaInput] = None
    temperature: float = DEFAULT_TEMPERATURE

    def build_task(self) -> tuple[str, Optional[types.Part]]:
        """Return the primary task text and an optional attachment part."""
        raise NotImplementedError

    def execute(
        self,
        generate_content: GenerateContentFunc,
        model: str,
        output_type: Any = dict,
        context: Any = None,
    ) -> Any:
        """Build the request, call the model and decode the reply into output_type."""
        schema = resolve_schema(self.schema, output_type)
        config = build_generation_config(self.instructions, schema, self.temperature)
        task_text, attachment = self.build_task()

        fragments = append_example_fragments([], self.examples, self.categorized_examples)
        contents = build_contents(task_text, fragments, attachment)
        logger.debug(
            f"{type(self).__name__}: {len(fragments)} example fragments, "
            f"attachment={attachment is not None}"
        )
        return execute_llm_call(generate_content, model, contents, config, output_type, context)


@dataclass
class PromptGenerator(Generator):
    prompt: str = ""
    examples: Sequence[PromptExample] = ()

    def build_task(self) -> tuple[str, Optional[types.Part]]:
        return self.prompt, None


@dataclass
class RelationGenerator(Generator):
    relation_entity: str = ""
    relation_context: str = ""
    relation_record_json: Any = ""
    examples: Sequence[RelationExample] = ()

    def build_task(self) -> tuple[str, Optional[types.Part]]:
        task = build_relation_task(
            self.relation_entity, self.relation_context, self.relation_record_json
        )
        return task, None


@dataclass
class FileRelationGenerator(Generator):
    relation_entity: str = ""
    relation_context: str = ""
    relation_record_file: bytes = b""
    file_mime_type: str = ""
    examples: Sequence[RelationExample] = ()

    def build_task(self) -> tuple[str, Optional[types.Part]]:
        text, attachment = file_adapter(self.relation_record_file, self.file_mime_type)
        task = build_file_task(self.relation_entity, self.relation_context)
        if attachment is not None:
            return f"{task}\nInput File: (see attached media part)", attachment
        return f"{task}\nInput File Content:\n{text}", None
