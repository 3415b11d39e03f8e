"""
Streaming client for Ollama's ``/api/generate`` endpoint.
"""

from __future__ import annotations

import json
import logging
from typing import AsyncIterator, Optional

import httpx

from .config import LocalServerConfig
from .exceptions import OllamaError
from .types import CompleteMessage, PartialToken, StreamToken

logger = logging.getLogger(__name__)


async def call_ollama(
    prompt: str,
    model: str,
    port: int,
    temperature: float,
    *,
    host: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> AsyncIterator[StreamToken]:
    """
    Stream a raw-prompt generation from a local Ollama server.

    The prompt is sent with ``raw: true`` so Ollama does not wrap it in the
    model's own chat template. Yields a :class:`PartialToken` for every
    fragment and one :class:`CompleteMessage` with the accumulated text once
    the server reports ``done``.

    Args:
        prompt: Fully rendered prompt string.
        model: Model name as known to Ollama (e.g. "mistral").
        port: Port the server listens on.
        temperature: Sampling temperature.
        host: Scheme and host, e.g. "http://localhost". Defaults to
            ``LocalServerConfig.from_env().ollama_host``.
        client: Optional pre-built ``httpx.AsyncClient``; one without a
            timeout is created (and closed) otherwise.

    Raises:
        OllamaError: If the server answers with an error status, or reports
            an error in the middle of the stream.
    """
    base = (host or LocalServerConfig.from_env().ollama_host).rstrip("/")
    url = f"{base}:{port}/api/generate"
    payload = {
        "model": model,
        "prompt": prompt,
        "stream": True,
        "raw": True,
        "options": {"temperature": temperature},
    }

    owns_client = client is None
    http = client if client is not None else httpx.AsyncClient(timeout=None)
    logger.debug("Streaming from Ollama %s (model=%s)", url, model)
    try:
        async with http.stream("POST", url, json=payload) as response:
            if response.status_code >= 400:
                body = await response.aread()
                raise OllamaError(response.status_code, _error_detail(body), url=url)

            parts = []
            async for line in response.aiter_lines():
                if not line.strip():
                    continue
                try:
                    chunk = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning("Skipping malformed Ollama stream line: %r", line[:200])
                    continue

                if "error" in chunk:
                    raise OllamaError(response.status_code, str(chunk["error"]), url=url)

                fragment = chunk.get("response", "")
                if fragment:
                    parts.append(fragment)
                    yield PartialToken(text=fragment)
                if chunk.get("done"):
                    yield CompleteMessage(message="".join(parts))
                    return
    finally:
        if owns_client:
            await http.aclose()


def _error_detail(body: bytes) -> str:
    try:
        error = json.loads(body).get("error")
    except (ValueError, AttributeError):
        error = None
    return str(error) if error else body.decode(errors="replace")[:200]


__all__ = ["call_ollama"]
