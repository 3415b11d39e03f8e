"""
Mistral-on-Ollama adapter: raw prompt in, token stream out.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Callable, List, Optional

from ..config import LocalServerConfig
from ..ollama import call_ollama
from ..templates import get_template
from ..types import (
    CompleteMessage,
    LLMConfig,
    Message,
    ProviderParameters,
    StreamToken,
    merge_parameters,
    seed_query_prefix,
)

logger = logging.getLogger(__name__)

DEFAULT_MISTRAL_PARAMS = {"model": "mistral", "temperature": 0}

# (prompt, model, port, temperature) -> token stream
StreamFunction = Callable[[str, str, int, float], AsyncIterator[StreamToken]]


class MistralAdapter:
    """
    Adapter for a locally served Mistral model that streams its answer.

    Intermediate tokens are discarded; the answer is taken from the terminal
    :class:`CompleteMessage` and cut at the template's first stop sequence.
    """

    def __init__(
        self,
        params: Optional[ProviderParameters] = None,
        *,
        stream_fn: StreamFunction = call_ollama,
        port: Optional[int] = None,
    ):
        self._params = params
        self._stream_fn = stream_fn
        self.port = port if port is not None else LocalServerConfig.from_env().ollama_port
        self._render = get_template("mistral")
        self.llm_config = LLMConfig()

    async def call_llm(
        self, messages: List[Message], query_prefix: Optional[str] = None
    ) -> Optional[str]:
        """
        Stream a completion and return the text before the first stop sequence.

        Note: a non-empty ``query_prefix`` is appended to ``messages`` in place
        as an assistant turn (see :func:`llmshim.types.seed_query_prefix`).
        """
        seed_query_prefix(messages, query_prefix)
        prompt, stop_sequences = self._render(messages)
        resolved = merge_parameters(DEFAULT_MISTRAL_PARAMS, self._params)

        logger.debug("Streaming %s from local port %d", resolved["model"], self.port)
        stream = self._stream_fn(prompt, resolved["model"], self.port, resolved["temperature"])

        async for token in stream:
            if isinstance(token, CompleteMessage):
                return token.message.split(stop_sequences[0], 1)[0] or None

        logger.debug("Stream ended without a complete message")
        return None


def get_mistral_adapter(
    params: Optional[ProviderParameters] = None,
    *,
    stream_fn: StreamFunction = call_ollama,
    port: Optional[int] = None,
) -> MistralAdapter:
    return MistralAdapter(params, stream_fn=stream_fn, port=port)


__all__ = ["DEFAULT_MISTRAL_PARAMS", "MistralAdapter", "StreamFunction", "get_mistral_adapter"]
