"""Gemini request assembly and the model-call boundary for structured output."""

import logging
from typing import Any, Callable, Optional, Sequence

from google import genai
from google.genai import types

from config import DEFAULT_TEMPERATURE, RESPONSE_MIME_TYPE
from decoding import decode_response
from errors import ProviderError

logger = logging.getLogger(__name__)

# (context, model, contents, config) -> response. Raising signals failure.
GenerateContentFunc = Callable[
    [Any, str, list[types.Content], types.GenerateContentConfig],
    types.GenerateContentResponse,
]


def create_client(api_key: Optional[str] = None) -> genai.Client:
    """Create Gemini client. Without a key the SDK reads it from the environment."""
    return genai.Client(api_key=api_key)


def client_generate_content(client: genai.Client) -> GenerateContentFunc:
    """Adapt a Gemini client to the model-call function signature.

    The SDK call is blocking and has no cancellation hook, so the context
    argument is accepted and ignored.
    """
    def generate_content(
        context: Any,
        model: str,
        contents: list[types.Content],
        config: types.GenerateContentConfig,
    ) -> types.GenerateContentResponse:
        return client.models.generate_content(model=model, contents=contents, config=config)

    return generate_content


def build_generation_config(
    instructions: str,
    schema: types.Schema,
    temperature: float = DEFAULT_TEMPERATURE,
) -> types.GenerateContentConfig:
    """Build a JSON-mode config with the instructions as the system directive."""
    return types.GenerateContentConfig(
        system_instruction=types.Content(parts=[types.Part(text=instructions)]),
        response_mime_type=RESPONSE_MIME_TYPE,
        response_schema=schema,
        temperature=temperature,
    )


def build_contents(
    task_text: str,
    example_fragments: Sequence[str] = (),
    attachment: Optional[types.Part] = None,
) -> list[types.Content]:
    """Build the single user content block: task text, attachment, then examples."""
    parts = [types.Part(text=task_text)]
    if attachment is not None:
        parts.append(attachment)
    parts.extend(types.Part(text=fragment) for fragment in example_fragments)
    return [types.Content(role="user", parts=parts)]


def execute_llm_call(
    generate_content: GenerateContentFunc,
    model: str,
    contents: list[types.Content],
    config: types.GenerateContentConfig,
    output_type: Any = dict,
    context: Any = None,
) -> Any:
    """Send the request through the model-call function and decode the reply."""
    n_parts = sum(len(c.parts or []) for c in contents)
    chars_in = sum(len(p.text or "") for c in contents for p in (c.parts or []))
    logger.debug(f"[LLM] model={model} parts={n_parts} chars_in={chars_in}")

    try:
        response = generate_content(context, model, contents, config)
    except Exception as exc:
        raise ProviderError(
            f"Error generating structured response from {model}: {exc}", model=model
        ) from exc

    return decode_response(response, output_type)
