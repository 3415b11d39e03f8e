"""Adapters for the supported LLM back ends."""

from .anthropic_adapter import ClaudeAdapter, build_claude_prompt, get_claude_adapter
from .lmstudio_adapter import LMStudioAdapter, get_lmstudio_adapter, lmstudio_client
from .mistral_adapter import MistralAdapter, get_mistral_adapter
from .openai_adapter import OpenAIAdapter, fold_trailing_assistant, get_openai_adapter

adapters = {
    "get_openai_adapter": get_openai_adapter,
    "get_claude_adapter": get_claude_adapter,
    "get_mistral_adapter": get_mistral_adapter,
    "get_lmstudio_adapter": get_lmstudio_adapter,
}

__all__ = [
    "ClaudeAdapter",
    "LMStudioAdapter",
    "MistralAdapter",
    "OpenAIAdapter",
    "adapters",
    "build_claude_prompt",
    "fold_trailing_assistant",
    "get_claude_adapter",
    "get_lmstudio_adapter",
    "get_mistral_adapter",
    "get_openai_adapter",
    "lmstudio_client",
]
