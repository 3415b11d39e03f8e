"""
LM Studio adapter: a local OpenAI-compatible server fed a raw templated prompt.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from ..config import LocalServerConfig
from ..exceptions import ProviderConfigurationError
from ..templates import get_template
from ..types import LLMConfig, Message, ProviderParameters, merge_parameters, seed_query_prefix
from .base import first_choice_content

if TYPE_CHECKING:
    from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

DEFAULT_LMSTUDIO_PARAMS = {"model": "mistral", "temperature": 0}


def lmstudio_client(base_url: Optional[str] = None) -> "AsyncOpenAI":
    """
    Build an ``AsyncOpenAI`` client pointed at a local LM Studio server.

    Args:
        base_url: OpenAI-compatible base URL. Defaults to
            ``LocalServerConfig.from_env().lmstudio_base_url``.

    Raises:
        ProviderConfigurationError: If the openai package is not installed.
    """
    try:
        from openai import AsyncOpenAI
    except ImportError as exc:
        raise ProviderConfigurationError(
            "LMStudio", "openai package", "Install with `pip install openai`."
        ) from exc

    # LM Studio ignores the key, but the OpenAI client requires one.
    return AsyncOpenAI(
        base_url=base_url or LocalServerConfig.from_env().lmstudio_base_url,
        api_key="lm-studio",
    )


class LMStudioAdapter:
    """
    Adapter for a local chat-compatible server driven by a prompt template.

    The conversation is rendered into one raw prompt with the selected
    template and sent as a single user message, together with the template's
    stop sequences.
    """

    def __init__(
        self,
        client: "AsyncOpenAI",
        template: str,
        params: Optional[ProviderParameters] = None,
    ):
        self._client = client
        self.template = template
        self._render = get_template(template)
        self._params = params
        self.llm_config = LLMConfig()

    async def call_llm(
        self, messages: List[Message], query_prefix: Optional[str] = None
    ) -> Optional[str]:
        """
        Render, send and return the first choice's text.

        Note: a non-empty ``query_prefix`` is appended to ``messages`` in place
        as an assistant turn (see :func:`llmshim.types.seed_query_prefix`).
        """
        seed_query_prefix(messages, query_prefix)
        prompt, stop_sequences = self._render(messages)

        logger.info("Calling LMStudio...")

        completion = await self._client.chat.completions.create(
            messages=[{"role": "user", "content": prompt}],
            **merge_parameters(DEFAULT_LMSTUDIO_PARAMS, self._params),
            stop=stop_sequences,
        )

        choices = getattr(completion, "choices", None)
        logger.debug("Got response %r", choices[0] if choices else None)
        return first_choice_content(completion)


def get_lmstudio_adapter(
    client: "AsyncOpenAI",
    template: str,
    params: Optional[ProviderParameters] = None,
) -> LMStudioAdapter:
    return LMStudioAdapter(client, template, params)


__all__ = ["DEFAULT_LMSTUDIO_PARAMS", "LMStudioAdapter", "get_lmstudio_adapter", "lmstudio_client"]
