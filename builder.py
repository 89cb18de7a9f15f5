"""Entry points binding generators to a model-call function or a Gemini client."""

from typing import Any, Optional, Sequence

from google import genai

from config import DEFAULT_MODEL
from generators import Generator, PromptGenerator
from llm_client import GenerateContentFunc, client_generate_content
from prompts import ExampleGroups, PromptExample
from schemas import SchemaInput


class StructBuilder:
    """Runs any generator variant against a fixed model-call function."""

    def __init__(self, generate_content: GenerateContentFunc, context: Any = None):
        self.generate_content = generate_content
        self.context = context

    def build(self, generator: Generator, model: str = DEFAULT_MODEL, output_type: Any = dict) -> Any:
        return generator.execute(self.generate_content, model, output_type, self.context)


class GenAIStructBuilder:
    """Prompt-driven structured generation on top of a Gemini client.

    Example:
        >>> builder = GenAIStructBuilder(create_client())
        >>> job = builder.generate_from_struct(
        ...     "gemini-2.5-flash", "need backend go dev 5yrs exp cairo",
        ...     "Extract job search fields.", JobSearch,
        ... )
    """

    def __init__(self, client: genai.Client, context: Any = None):
        self._builder = StructBuilder(client_generate_content(client), context)

    def generate_from_schema(
        self,
        model: str,
        prompt: str,
        instructions: str,
        schema_json: SchemaInput,
        examples: Sequence[PromptExample] = (),
        categorized_examples: Optional[ExampleGroups] = None,
        output_type: Any = dict,
    ) -> Any:
        """Generate with an explicit schema document."""
        generator = PromptGenerator(
            prompt=prompt,
            instructions=instructions,
            examples=examples,
            categorized_examples=categorized_examples,
            schema=schema_json,
        )
        return self._builder.build(generator, model, output_type)

    def generate_from_struct(
        self,
        model: str,
        prompt: str,
        instructions: str,
        output_type: Any,
        examples: Sequence[PromptExample] = (),
        categorized_examples: Optional[ExampleGroups] = None,
    ) -> Any:
        """Generate with a schema inferred from output_type."""
        generator = PromptGenerator(
            prompt=prompt,
            instructions=instructions,
            examples=examples,
            categorized_examples=categorized_examples,
        )
        return self._builder.build(generator, model, output_type)
