"""
Core message, parameter and stream-token types shared by every adapter.

These primitives are provider-agnostic: each adapter translates a list of
:class:`Message` objects into its back end's native request shape and
collapses the response into ``str | None``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Dict,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)


class Role(str, Enum):
    """Conversation role."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Message:
    """A single role-tagged conversation turn."""

    role: Role
    content: str

    def __post_init__(self) -> None:
        # Accept plain strings so callers can write Message("user", "hi").
        self.role = Role(self.role)

    def to_dict(self) -> Dict[str, str]:
        """Return the chat-completion payload form of this message."""
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Message":
        return cls(role=Role(data["role"]), content=str(data["content"]))


@dataclass
class ProviderParameters:
    """
    Caller-supplied model parameters.

    Merged over each adapter's defaults with :func:`merge_parameters`; a field
    left as ``None`` keeps the adapter default.
    """

    model: str
    temperature: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: value
            for key, value in (("model", self.model), ("temperature", self.temperature))
            if value is not None
        }


def merge_parameters(
    defaults: Mapping[str, Any], params: Optional[ProviderParameters] = None
) -> Dict[str, Any]:
    """Shallow, field-by-field override of ``defaults`` by ``params``."""
    merged = dict(defaults)
    if params is not None:
        merged.update(params.to_dict())
    return merged


@dataclass
class LLMConfig:
    """
    Static per-adapter hints for the code that assembles the message list.

    Adapters expose this but never read it. A caller may, for example, inject
    today's date into the system turn when ``enable_todays_date`` is set, or
    prepend ``few_shot_learning`` turns to the conversation.
    """

    enable_todays_date: bool = True
    few_shot_learning: List[Message] = field(default_factory=list)


@dataclass(frozen=True)
class PartialToken:
    """Intermediate fragment produced while a local model is generating."""

    text: str


@dataclass(frozen=True)
class CompleteMessage:
    """Terminal token carrying the full generated text."""

    message: str


StreamToken = Union[PartialToken, CompleteMessage]


class TemplatedPrompt(NamedTuple):
    """Output of a template function: the raw prompt plus its stop sequences."""

    prompt: str
    stop_sequences: List[str]


@runtime_checkable
class Adapter(Protocol):
    """
    Uniform contract every provider adapter satisfies.

    ``call_llm`` returns the model's answer, or ``None`` when no usable answer
    came back. Exceptions raised by the underlying client propagate unchanged.
    """

    llm_config: LLMConfig

    async def call_llm(
        self, messages: List[Message], query_prefix: Optional[str] = None
    ) -> Optional[str]:
        ...


def seed_query_prefix(messages: List[Message], query_prefix: Optional[str]) -> bool:
    """
    Append ``query_prefix`` as a synthetic assistant turn, in place.

    Nothing is appended when the prefix is empty or the conversation already
    ends on an assistant turn. Returns True when ``messages`` was extended.
    """
    if not query_prefix:
        return False
    if messages and messages[-1].role == Role.ASSISTANT:
        return False
    messages.append(Message(role=Role.ASSISTANT, content=query_prefix))
    return True


__all__ = [
    "Adapter",
    "CompleteMessage",
    "LLMConfig",
    "Message",
    "PartialToken",
    "ProviderParameters",
    "Role",
    "StreamToken",
    "TemplatedPrompt",
    "merge_parameters",
    "seed_query_prefix",
]
