"""Drafts a response to a single request with Claude."""

from .config import DRAFT_MAX_TOKENS, DRAFT_TEMPERATURE
from .llm import complete
from .prompts import (
    DRAFT_SYSTEM_PROMPT,
    build_objection_message,
    build_refine_message,
    build_standard_message,
)

OBJECTION_TYPES = [
    "Overly Broad",
    "Unduly Burdensome",
    "Not Proportional",
    "Vague",
    "Outside Control",
    "Irrelevant",
    "Confidentiality",
    "Privileged",
]


def build_draft_prompt(
    request_text: str,
    current_response: str = "",
    objection_type: str | None = None,
    instruction: str = "",
) -> str:
    """Pick the user message for the drafting call.

    An objection label wins over any draft or instruction; with neither, the
    model is asked for the standard agreement to produce.
    """
    current_response = (current_response or "").strip()
    instruction = (instruction or "").strip()
    objection_type = (objection_type or "").strip()

    if objection_type:
        return build_objection_message(request_text, objection_type)
    if current_response or instruction:
        return build_refine_message(request_text, current_response, instruction)
    return build_standard_message(request_text)


def draft_response(
    request_text: str,
    current_response: str = "",
    objection_type: str | None = None,
    instruction: str = "",
) -> str:
    """Return Claude's drafted response text. Raises LLMError on any failure."""
    if not request_text or not request_text.strip():
        raise ValueError("Request text is required")
    prompt = build_draft_prompt(request_text, current_response, objection_type, instruction)
    return complete(
        DRAFT_SYSTEM_PROMPT,
        prompt,
        max_tokens=DRAFT_MAX_TOKENS,
        temperature=DRAFT_TEMPERATURE,
    )
