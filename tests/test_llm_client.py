"""Unit tests for request assembly and the model-call boundary."""

from unittest.mock import Mock

import pytest
from google.genai import types

from config import DEFAULT_TEMPERATURE, RESPONSE_MIME_TYPE
from errors import ProviderError
from llm_client import build_contents, build_generation_config, client_generate_content, execute_llm_call


class TestBuildGenerationConfig:
    """Tests for generation config assembly."""

    def test_defaults(self) -> None:
        schema = types.Schema(type=types.Type.STRING)
        config = build_generation_config("extract job fields", schema)

        assert config.response_mime_type == RESPONSE_MIME_TYPE == "application/json"
        assert config.response_schema == schema
        assert config.temperature == pytest.approx(DEFAULT_TEMPERATURE)
        assert config.temperature == pytest.approx(0.2)

    def test_instructions_are_a_system_directive(self) -> None:
        config = build_generation_config("extract job fields", types.Schema(type=types.Type.STRING))
        assert config.system_instruction.parts[0].text == "extract job fields"

    def test_temperature_override(self) -> None:
        config = build_generation_config("x", types.Schema(type=types.Type.STRING), temperature=0.7)
        assert config.temperature == pytest.approx(0.7)


class TestBuildContents:
    """Tests for content block assembly."""

    def test_single_block_task_then_examples(self) -> None:
        contents = build_contents("task", ["ex1", "ex2"])
        assert len(contents) == 1
        assert contents[0].role == "user"
        assert [p.text for p in contents[0].parts] == ["task", "ex1", "ex2"]

    def test_instructions_not_in_content(self) -> None:
        contents = build_contents("task")
        assert [p.text for p in contents[0].parts] == ["task"]

    def test_attachment_follows_task(self) -> None:
        attachment = types.Part.from_bytes(data=b"%PDF", mime_type="application/pdf")
        parts = build_contents("task", ["ex"], attachment)[0].parts
        assert parts[0].text == "task"
        assert parts[1].inline_data.data == b"%PDF"
        assert parts[2].text == "ex"


class TestExecuteLLMCall:
    """Tests for invoking the model-call function."""

    def test_arguments_pass_through(self, recording_model) -> None:
        contents = build_contents("task")
        config = build_generation_config("x", types.Schema(type=types.Type.OBJECT))
        ctx = object()

        result = execute_llm_call(recording_model, "gemini-test", contents, config, dict, ctx)

        call = recording_model.calls[0]
        assert call["context"] is ctx
        assert call["model"] == "gemini-test"
        assert call["contents"] is contents
        assert call["config"] is config
        assert result["job_title"] == "Mock Data Engineer"

    def test_provider_failure_is_wrapped(self, model_factory) -> None:
        cause = RuntimeError("Mock API error: Test model requested failure")
        model = model_factory(error=cause)

        with pytest.raises(ProviderError) as exc_info:
            execute_llm_call(model, "test-error-model", build_contents("t"), None)

        assert exc_info.value.__cause__ is cause
        assert exc_info.value.model == "test-error-model"
        assert "Test model requested failure" in str(exc_info.value)


def test_client_adapter_calls_sdk(response_factory) -> None:
    client = Mock()
    client.models.generate_content.return_value = response_factory('{"a": 1}')
    contents = build_contents("task")
    config = build_generation_config("x", types.Schema(type=types.Type.OBJECT))

    generate_content = client_generate_content(client)
    response = generate_content(None, "gemini-test", contents, config)

    client.models.generate_content.assert_called_once_with(
        model="gemini-test", contents=contents, config=config
    )
    assert response.candidates[0].content.parts[0].text == '{"a": 1}'
