"""
Helpers shared by the provider adapters.

The adapters themselves do not inherit from a common class; each one
satisfies :class:`llmshim.types.Adapter` structurally.
"""

from __future__ import annotations

from typing import Any, Optional


def first_choice_content(completion: Any) -> Optional[str]:
    """
    Return ``completion.choices[0].message.content`` or None.

    None is returned when the completion, its choice list, the first choice,
    its message or the content is missing or empty.
    """
    choices = getattr(completion, "choices", None) if completion is not None else None
    if not choices:
        return None
    first = choices[0]
    message = getattr(first, "message", None) if first is not None else None
    content = getattr(message, "content", None) if message is not None else None
    return content or None


__all__ = ["first_choice_content"]
