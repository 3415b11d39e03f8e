"""
Lightweight ``.env`` loader used when resolving local server settings.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable


def load_env_if_present(candidate_paths: Iterable[Path]) -> bool:
    """
    Load ``KEY=value`` pairs from the first ``.env``-style file that exists.

    Variables already present in the environment are never overwritten.
    Returns True when a file was read.
    """
    for env_path in candidate_paths:
        if not env_path.is_file():
            continue
        try:
            text = env_path.read_text()
        except OSError:
            # Unreadable file; fall through to the next candidate.
            continue
        for line in text.splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or "=" not in stripped:
                continue
            key, value = stripped.split("=", 1)
            key = key.strip()
            if key and key not in os.environ:
                os.environ[key] = value.strip().strip("'\"")
        return True
    return False


def load_default_env() -> bool:
    """Load from common locations: cwd/.env, then the project root .env."""
    return load_env_if_present(
        [
            Path.cwd() / ".env",
            Path(__file__).resolve().parents[2] / ".env",
        ]
    )


__all__ = ["load_default_env", "load_env_if_present"]
