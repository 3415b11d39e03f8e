"""
Prompt templates for models that are driven with a single raw prompt string.

Each template renders the whole conversation and returns the stop sequences
that mark the end of the model's turn. When the conversation ends on an
assistant message, that turn is left open so the model continues it.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from .exceptions import TemplateNotFoundError
from .types import Message, Role, TemplatedPrompt

TemplateFunction = Callable[[List[Message]], TemplatedPrompt]


def _is_open_turn(messages: List[Message], index: int) -> bool:
    return index == len(messages) - 1 and messages[index].role == Role.ASSISTANT


def mistral_template(messages: List[Message]) -> TemplatedPrompt:
    """
    Mistral-instruct format: ``<s>[INST] user [/INST] answer</s>[INST] ...``.

    Mistral has no system slot, so system turns are merged into the next
    instruction block.
    """
    prompt = "<s>"
    pending_system: List[str] = []

    for index, message in enumerate(messages):
        if message.role == Role.SYSTEM:
            pending_system.append(message.content)
        elif message.role == Role.USER:
            instruction = "\n\n".join(pending_system + [message.content])
            pending_system = []
            prompt += f"[INST] {instruction} [/INST]"
        else:
            prompt += f" {message.content}"
            if not _is_open_turn(messages, index):
                prompt += "</s>"

    if pending_system:
        instruction = "\n\n".join(pending_system)
        prompt += f"[INST] {instruction} [/INST]"

    return TemplatedPrompt(prompt=prompt, stop_sequences=["</s>", "[INST]"])


def chatml_template(messages: List[Message]) -> TemplatedPrompt:
    """ChatML format used by OpenHermes, Qwen and friends."""
    parts = []
    for index, message in enumerate(messages):
        if _is_open_turn(messages, index):
            parts.append(f"<|im_start|>assistant\n{message.content}")
        else:
            parts.append(f"<|im_start|>{message.role.value}\n{message.content}<|im_end|>\n")

    if not messages or messages[-1].role != Role.ASSISTANT:
        parts.append("<|im_start|>assistant\n")

    return TemplatedPrompt(prompt="".join(parts), stop_sequences=["<|im_end|>", "<|im_start|>"])


def llama2_template(messages: List[Message]) -> TemplatedPrompt:
    """Llama 2 chat format, with system turns wrapped in ``<<SYS>>`` tags."""
    prompt = ""
    pending_system: List[str] = []
    block_open = False

    for index, message in enumerate(messages):
        if message.role == Role.SYSTEM:
            pending_system.append(message.content)
            continue

        if message.role == Role.USER:
            instruction = message.content
            if pending_system:
                system = "\n".join(pending_system)
                instruction = f"<<SYS>>\n{system}\n<</SYS>>\n\n{instruction}"
                pending_system = []
            prompt += f"<s>[INST] {instruction} [/INST]"
            block_open = True
        else:
            if not block_open:
                prompt += "<s>"
            prompt += f" {message.content}"
            if not _is_open_turn(messages, index):
                prompt += " </s>"
            block_open = False

    if pending_system:
        system = "\n".join(pending_system)
        prompt += f"<s>[INST] <<SYS>>\n{system}\n<</SYS>> [/INST]"

    return TemplatedPrompt(prompt=prompt, stop_sequences=["</s>", "[INST]"])


LLM_TEMPLATE_FUNCTIONS: Dict[str, TemplateFunction] = {
    "mistral": mistral_template,
    "chatml": chatml_template,
    "llama2": llama2_template,
}


def get_template(name: str) -> TemplateFunction:
    """Look up a template function by model family name."""
    try:
        return LLM_TEMPLATE_FUNCTIONS[name]
    except KeyError:
        raise TemplateNotFoundError(name, LLM_TEMPLATE_FUNCTIONS) from None


__all__ = [
    "LLM_TEMPLATE_FUNCTIONS",
    "TemplateFunction",
    "chatml_template",
    "get_template",
    "llama2_template",
    "mistral_template",
]
