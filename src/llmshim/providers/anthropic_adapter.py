"""
Anthropic text-completion adapter.

Targets the legacy ``completions`` endpoint, which takes one prompt string
built from human/assistant markers (``anthropic.HUMAN_PROMPT`` and
``anthropic.AI_PROMPT`` in the SDK) rather than a list of messages.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from ..types import LLMConfig, Message, ProviderParameters, Role, merge_parameters

if TYPE_CHECKING:
    from anthropic import AsyncAnthropic

logger = logging.getLogger(__name__)

DEFAULT_CLAUDE_PARAMS = {"model": "claude-2", "temperature": 0}
MAX_TOKENS_TO_SAMPLE = 10000


def build_claude_prompt(
    messages: List[Message],
    human_prompt_tag: str,
    assistant_prompt_tag: str,
    query_prefix: Optional[str] = None,
) -> str:
    """
    Render ``messages`` as a single human/assistant transcript.

    System turns go through the human channel wrapped in ``<system>`` tags.
    Unless the transcript already ends on an assistant turn, an assistant
    marker (followed by ``query_prefix``, if any) is appended so the model
    answers next.
    """
    rendered = []
    for message in messages:
        if message.role == Role.USER:
            rendered.append(f"{human_prompt_tag} {message.content}")
        elif message.role == Role.ASSISTANT:
            rendered.append(f"{assistant_prompt_tag} {message.content}")
        else:
            rendered.append(f"{human_prompt_tag} <system>{message.content}</system>")
    prompt = "".join(rendered)

    if not messages or messages[-1].role != Role.ASSISTANT:
        prompt += assistant_prompt_tag
        if query_prefix:
            prompt += f" {query_prefix}"

    return prompt


class ClaudeAdapter:
    """Adapter for Anthropic's text-completion API."""

    def __init__(
        self,
        human_prompt_tag: str,
        assistant_prompt_tag: str,
        client: "AsyncAnthropic",
        params: Optional[ProviderParameters] = None,
    ):
        self.human_prompt_tag = human_prompt_tag
        self.assistant_prompt_tag = assistant_prompt_tag
        self._client = client
        self._params = params
        self.llm_config = LLMConfig()

    async def call_llm(
        self, messages: List[Message], query_prefix: Optional[str] = None
    ) -> Optional[str]:
        prompt = build_claude_prompt(
            messages, self.human_prompt_tag, self.assistant_prompt_tag, query_prefix
        )
        request_args = {
            "max_tokens_to_sample": MAX_TOKENS_TO_SAMPLE,
            **merge_parameters(DEFAULT_CLAUDE_PARAMS, self._params),
        }
        logger.debug(
            "Anthropic completion: model=%s, prompt=%d chars", request_args["model"], len(prompt)
        )

        completion = await self._client.completions.create(prompt=prompt, **request_args)
        return getattr(completion, "completion", None) or None


def get_claude_adapter(
    human_prompt_tag: str,
    assistant_prompt_tag: str,
    client: "AsyncAnthropic",
    params: Optional[ProviderParameters] = None,
) -> ClaudeAdapter:
    return ClaudeAdapter(human_prompt_tag, assistant_prompt_tag, client, params)


__all__ = [
    "ClaudeAdapter",
    "DEFAULT_CLAUDE_PARAMS",
    "MAX_TOKENS_TO_SAMPLE",
    "build_claude_prompt",
    "get_claude_adapter",
]
