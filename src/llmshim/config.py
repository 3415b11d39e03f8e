"""
Connection settings for the locally hosted back ends.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import load_default_env

OLLAMA_PORT = 11434


@dataclass
class LocalServerConfig:
    """
    Where the local model servers listen.

    Attributes:
        ollama_host: Scheme and host of the Ollama server, without port.
            Default: "http://localhost".
        ollama_port: Port of the Ollama server. Default: 11434.
        lmstudio_base_url: OpenAI-compatible base URL of the LM Studio server.
            Default: "http://localhost:1234/v1".
    """

    ollama_host: str = "http://localhost"
    ollama_port: int = OLLAMA_PORT
    lmstudio_base_url: str = "http://localhost:1234/v1"

    @classmethod
    def from_env(cls) -> "LocalServerConfig":
        """
        Build settings from ``LLMSHIM_*`` environment variables.

        A ``.env`` file in the working directory is loaded first; variables
        already set in the environment take precedence over it.
        """
        load_default_env()
        defaults = cls()
        port = os.getenv("LLMSHIM_OLLAMA_PORT")
        return cls(
            ollama_host=os.getenv("LLMSHIM_OLLAMA_HOST", defaults.ollama_host).rstrip("/"),
            ollama_port=int(port) if port else defaults.ollama_port,
            lmstudio_base_url=os.getenv(
                "LLMSHIM_LMSTUDIO_BASE_URL", defaults.lmstudio_base_url
            ).rstrip("/"),
        )


__all__ = ["LocalServerConfig", "OLLAMA_PORT"]
