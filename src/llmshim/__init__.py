"""Public exports for the llmshim package."""

from .config import OLLAMA_PORT, LocalServerConfig
from .exceptions import (
    LlmshimError,
    OllamaError,
    ProviderConfigurationError,
    TemplateNotFoundError,
)
from .ollama import call_ollama
from .providers import (
    ClaudeAdapter,
    LMStudioAdapter,
    MistralAdapter,
    OpenAIAdapter,
    adapters,
    get_claude_adapter,
    get_lmstudio_adapter,
    get_mistral_adapter,
    get_openai_adapter,
    lmstudio_client,
)
from .templates import LLM_TEMPLATE_FUNCTIONS, get_template
from .types import (
    Adapter,
    CompleteMessage,
    LLMConfig,
    Message,
    PartialToken,
    ProviderParameters,
    Role,
    StreamToken,
    TemplatedPrompt,
    seed_query_prefix,
)

__all__ = [
    # Types
    "Adapter",
    "CompleteMessage",
    "LLMConfig",
    "Message",
    "PartialToken",
    "ProviderParameters",
    "Role",
    "StreamToken",
    "TemplatedPrompt",
    "seed_query_prefix",
    # Adapters
    "ClaudeAdapter",
    "LMStudioAdapter",
    "MistralAdapter",
    "OpenAIAdapter",
    "adapters",
    "get_claude_adapter",
    "get_lmstudio_adapter",
    "get_mistral_adapter",
    "get_openai_adapter",
    "lmstudio_client",
    # Collaborators
    "LLM_TEMPLATE_FUNCTIONS",
    "call_ollama",
    "get_template",
    # Configuration
    "LocalServerConfig",
    "OLLAMA_PORT",
    # Exceptions
    "LlmshimError",
    "OllamaError",
    "ProviderConfigurationError",
    "TemplateNotFoundError",
]
