"""
OpenAI chat-completion adapter.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, List, Optional

from ..types import LLMConfig, Message, ProviderParameters, Role, merge_parameters
from .base import first_choice_content

if TYPE_CHECKING:
    from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_PARAMS = {"model": "gpt-3.5-turbo", "temperature": 0}


def fold_trailing_assistant(messages: List[Message]) -> List[Message]:
    """
    Merge a trailing assistant turn into the turn before it.

    Chat-completion APIs reserve the final assistant slot for their own output,
    so the assistant text is appended (after a blank line) to the previous
    message instead. Returns a new list; ``messages`` and its items are left
    untouched. A lone assistant message has nothing to fold into and yields an
    empty list.
    """
    if not messages or messages[-1].role != Role.ASSISTANT:
        return list(messages)

    folded = list(messages[:-1])
    if folded:
        previous = folded[-1]
        folded[-1] = replace(previous, content=f"{previous.content}\n\n{messages[-1].content}")
    return folded


class OpenAIAdapter:
    """Adapter for OpenAI-style Chat Completions APIs."""

    def __init__(self, client: "AsyncOpenAI", params: Optional[ProviderParameters] = None):
        self._client = client
        self._params = params
        self.llm_config = LLMConfig()

    async def call_llm(
        self, messages: List[Message], query_prefix: Optional[str] = None
    ) -> Optional[str]:
        """
        Send the conversation and return the first choice's text.

        ``query_prefix`` is accepted for interface parity but unused; a
        trailing assistant turn is folded into the previous message instead.
        """
        if not messages:
            return None

        payload = fold_trailing_assistant(messages)
        if not payload:
            return None

        request_args = merge_parameters(DEFAULT_OPENAI_PARAMS, self._params)
        logger.debug(
            "OpenAI chat completion: model=%s, %d message(s)", request_args["model"], len(payload)
        )
        completion = await self._client.chat.completions.create(
            messages=[message.to_dict() for message in payload],
            **request_args,
        )
        return first_choice_content(completion)


def get_openai_adapter(
    client: "AsyncOpenAI", params: Optional[ProviderParameters] = None
) -> OpenAIAdapter:
    return OpenAIAdapter(client, params)


__all__ = [
    "DEFAULT_OPENAI_PARAMS",
    "OpenAIAdapter",
    "fold_trailing_assistant",
    "get_openai_adapter",
]
