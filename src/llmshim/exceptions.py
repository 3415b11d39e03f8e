"""
Custom exceptions with readable messages and concrete suggestions.

Only errors that originate in this package live here. Exceptions raised by
the OpenAI / Anthropic SDKs or by httpx propagate to the caller unchanged.
"""

from __future__ import annotations

from typing import Iterable, Optional


def _boxed(title: str, body: str, suggestion: str = "") -> str:
    message = f"\n{'='*60}\n"
    message += f"❌ {title}\n"
    message += f"{'='*60}\n\n"
    message += body
    if suggestion:
        message += f"\n💡 Suggestion: {suggestion}\n"
    message += f"\n{'='*60}\n"
    return message


class LlmshimError(Exception):
    """Base exception for all llmshim errors."""

    pass


class TemplateNotFoundError(LlmshimError, KeyError):
    """Raised when a prompt template key is not registered."""

    def __init__(self, template: str, available: Iterable[str] = ()):
        self.template = template
        self.available = sorted(available)

        body = f"Template: {template!r}\n"
        suggestion = ""
        if self.available:
            suggestion = f"Use one of: {', '.join(self.available)}"
        super().__init__(_boxed("Unknown Prompt Template", body, suggestion))

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the boxed message.
        return str(self.args[0])


class OllamaError(LlmshimError):
    """Raised when the Ollama server answers with an HTTP error status."""

    def __init__(self, status_code: int, detail: str, url: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail
        self.url = url

        body = f"Status: {status_code}\n"
        if url:
            body += f"URL: {url}\n"
        body += f"Detail: {detail}\n"
        suggestion = ""
        if status_code == 404:
            suggestion = "Pull the model first: `ollama pull <model>`"
        super().__init__(_boxed("Ollama Request Failed", body, suggestion))


class ProviderConfigurationError(LlmshimError):
    """Raised when an optional client library is missing or misconfigured."""

    def __init__(self, provider_name: str, missing_config: str, install_hint: str = ""):
        self.provider_name = provider_name
        self.missing_config = missing_config
        self.install_hint = install_hint

        body = f"Provider: {provider_name}\nMissing: {missing_config}\n"
        super().__init__(_boxed("Provider Configuration Error", body, install_hint))


__all__ = [
    "LlmshimError",
    "OllamaError",
    "ProviderConfigurationError",
    "TemplateNotFoundError",
]
