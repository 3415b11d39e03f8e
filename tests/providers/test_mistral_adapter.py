"""
Tests for the streaming Mistral (Ollama) adapter.
"""

from __future__ import annotations

from typing import List

import pytest

from llmshim.providers.mistral_adapter import MistralAdapter, get_mistral_adapter
from llmshim.types import Adapter, CompleteMessage, Message, PartialToken, ProviderParameters, Role


class RecordingStream:
    """Stream function that replays fixed tokens and records its arguments."""

    def __init__(self, tokens: List):
        self.tokens = tokens
        self.calls: List[tuple] = []
        self.consumed = 0

    def __call__(self, prompt, model, port, temperature):
        self.calls.append((prompt, model, port, temperature))
        return self._generate()

    async def _generate(self):
        for token in self.tokens:
            self.consumed += 1
            yield token


class TestMistralAdapter:
    @pytest.mark.asyncio
    async def test_returns_text_before_first_stop_sequence(self):
        stream = RecordingStream(
            [PartialToken("hel"), PartialToken("lo"), CompleteMessage("hello</s>world")]
        )
        adapter = get_mistral_adapter(stream_fn=stream, port=11434)

        result = await adapter.call_llm([Message(Role.USER, "greet")])

        assert result == "hello"

    @pytest.mark.asyncio
    async def test_only_first_stop_sequence_truncates(self):
        stream = RecordingStream([CompleteMessage("a [INST] b</s>c</s>")])
        adapter = get_mistral_adapter(stream_fn=stream, port=11434)

        assert await adapter.call_llm([Message(Role.USER, "x")]) == "a [INST] b"

    @pytest.mark.asyncio
    async def test_stream_without_complete_message_returns_none(self):
        stream = RecordingStream([PartialToken("a"), PartialToken("b")])
        adapter = get_mistral_adapter(stream_fn=stream, port=11434)

        assert await adapter.call_llm([Message(Role.USER, "x")]) is None

    @pytest.mark.asyncio
    async def test_empty_truncation_returns_none(self):
        stream = RecordingStream([CompleteMessage("</s>everything after the stop")])
        adapter = get_mistral_adapter(stream_fn=stream, port=11434)

        assert await adapter.call_llm([Message(Role.USER, "x")]) is None

    @pytest.mark.asyncio
    async def test_stops_consuming_at_complete_message(self):
        stream = RecordingStream(
            [CompleteMessage("first"), CompleteMessage("second"), PartialToken("late")]
        )
        adapter = get_mistral_adapter(stream_fn=stream, port=11434)

        assert await adapter.call_llm([Message(Role.USER, "x")]) == "first"
        assert stream.consumed == 1

    @pytest.mark.asyncio
    async def test_passes_prompt_model_port_and_temperature(self):
        stream = RecordingStream([CompleteMessage("ok")])
        adapter = get_mistral_adapter(stream_fn=stream, port=11434)

        await adapter.call_llm([Message(Role.USER, "hi")])

        assert stream.calls == [("<s>[INST] hi [/INST]", "mistral", 11434, 0)]

    @pytest.mark.asyncio
    async def test_caller_params_resolve_over_defaults(self):
        stream = RecordingStream([CompleteMessage("ok")])
        adapter = get_mistral_adapter(
            ProviderParameters(model="mistral:7b-instruct", temperature=0.3),
            stream_fn=stream,
            port=5000,
        )

        await adapter.call_llm([Message(Role.USER, "hi")])

        _, model, port, temperature = stream.calls[0]
        assert (model, port, temperature) == ("mistral:7b-instruct", 5000, 0.3)

    @pytest.mark.asyncio
    async def test_query_prefix_appended_to_caller_messages(self):
        stream = RecordingStream([CompleteMessage(" blue")])
        adapter = get_mistral_adapter(stream_fn=stream, port=11434)
        messages = [Message(Role.USER, "Sky color?")]

        await adapter.call_llm(messages, "The sky is")

        assert messages[-1] == Message(Role.ASSISTANT, "The sky is")
        assert len(messages) == 2
        assert stream.calls[0][0].endswith("[/INST] The sky is")

    @pytest.mark.asyncio
    async def test_query_prefix_skipped_after_assistant_turn(self):
        stream = RecordingStream([CompleteMessage("x")])
        adapter = get_mistral_adapter(stream_fn=stream, port=11434)
        messages = [Message(Role.USER, "q"), Message(Role.ASSISTANT, "partial")]

        await adapter.call_llm(messages, "prefix")

        assert len(messages) == 2

    @pytest.mark.asyncio
    async def test_stream_errors_propagate(self):
        async def failing_stream(prompt, model, port, temperature):
            yield PartialToken("par")
            raise ConnectionError("stream reset")

        adapter = get_mistral_adapter(stream_fn=failing_stream, port=11434)

        with pytest.raises(ConnectionError, match="stream reset"):
            await adapter.call_llm([Message(Role.USER, "x")])

    def test_port_defaults_to_configuration(self, monkeypatch: pytest.MonkeyPatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("LLMSHIM_OLLAMA_PORT", raising=False)
        assert get_mistral_adapter().port == 11434

        monkeypatch.setenv("LLMSHIM_OLLAMA_PORT", "12000")
        assert get_mistral_adapter().port == 12000

    def test_satisfies_adapter_protocol(self):
        adapter = get_mistral_adapter(port=11434)
        assert isinstance(adapter, MistralAdapter)
        assert isinstance(adapter, Adapter)
        assert adapter.llm_config.few_shot_learning == []
