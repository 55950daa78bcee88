"""Claude calls for document structuring and response drafting."""

import json

import anthropic

from .config import (
    ANTHROPIC_API_KEY, HTTP_TIMEOUT, LLM_MODEL,
    MAX_STRUCTURE_CHARS, STRUCTURE_MAX_TOKENS,
)
from .models import RequestItem
from .prompts import STRUCTURE_SYSTEM_PROMPT, build_structure_message
from .segmenter import dedupe_requests


class LLMError(RuntimeError):
    pass


_llm_client = None


def _get_llm_client():
    global _llm_client
    if not ANTHROPIC_API_KEY:
        raise LLMError("ANTHROPIC_API_KEY not configured.")
    if _llm_client is None:
        _llm_client = anthropic.Anthropic(api_key=ANTHROPIC_API_KEY, timeout=HTTP_TIMEOUT)
    return _llm_client


def _call(system: str, user: str, max_tokens: int, temperature: float | None = None) -> tuple[str, str | None]:
    """Send one message to Claude; return (text, stop_reason)."""
    client = _get_llm_client()
    kwargs = {}
    if temperature is not None:
        kwargs["temperature"] = temperature
    try:
        response = client.messages.create(
            model=LLM_MODEL,
            max_tokens=max_tokens,
            system=system,
            messages=[{"role": "user", "content": user}],
            **kwargs,
        )
    except anthropic.APIError as e:
        raise LLMError(f"Claude request failed: {e}") from e

    text = "".join(
        block.text for block in response.content if getattr(block, "type", "") == "text"
    )
    return text.strip(), response.stop_reason


def complete(system: str, user: str, max_tokens: int, temperature: float | None = None) -> str:
    text, _ = _call(system, user, max_tokens, temperature)
    if not text:
        raise LLMError("Claude returned an empty response.")
    return text


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        text = text.rsplit("```", 1)[0]
    return text.strip()


def _recover_request_objects(text: str) -> list[dict]:
    """Collect the complete request objects from a truncated JSON response.

    When the response hits max_tokens the outer object never closes; every
    object nested directly inside it (the "requests" entries) that did close
    is still usable.
    """
    results = []
    depth = 0
    obj_start = None
    in_string = False
    escape_next = False

    for i, ch in enumerate(text):
        if escape_next:
            escape_next = False
            continue
        if ch == "\\" and in_string:
            escape_next = True
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue

        if ch == "{":
            depth += 1
            if depth == 2:
                obj_start = i
        elif ch == "}":
            if depth == 2 and obj_start is not None:
                try:
                    results.append(json.loads(text[obj_start:i + 1]))
                except json.JSONDecodeError:
                    pass
                obj_start = None
            depth -= 1

    return results


def _normalize_id(raw) -> int | str | None:
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    value = str(raw).strip()
    if not value:
        return None
    return int(value) if value.isdigit() else value


def _to_request_items(entries) -> list[RequestItem]:
    items = []
    if not isinstance(entries, list):
        return items
    for position, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            continue
        text = str(entry.get("text") or "").strip()
        if not text:
            continue
        req_id = _normalize_id(entry.get("id"))
        items.append(RequestItem(id=req_id if req_id is not None else position, text=text))
    return dedupe_requests(items)


def structure_document(text: str) -> tuple[list[RequestItem], str]:
    """Ask Claude to clean the parsed text and split it into requests.

    Returns (requests, cleaned_full_text). Either may be empty; the caller
    decides how to fall back.
    """
    raw, stop_reason = _call(
        STRUCTURE_SYSTEM_PROMPT,
        build_structure_message(text[:MAX_STRUCTURE_CHARS]),
        max_tokens=STRUCTURE_MAX_TOKENS,
    )
    raw = _strip_code_fences(raw)

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        if stop_reason == "max_tokens":
            print("  Warning: Structuring response truncated at max_tokens. Recovering complete requests...")
            recovered = _to_request_items(_recover_request_objects(raw))
            if recovered:
                return recovered, ""
        raise LLMError(f"Claude returned invalid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise LLMError(f"Expected JSON object from Claude, got {type(parsed).__name__}")

    cleaned = parsed.get("cleaned_full_text")
    cleaned = cleaned.strip() if isinstance(cleaned, str) else ""
    return _to_request_items(parsed.get("requests")), cleaned
