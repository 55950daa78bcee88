"""Extraction pipeline: Reducto and Claude when available, local parsing and regex otherwise.

Order of preference:
    Reducto parse -> Claude structuring        (both keys configured, PDF/DOCX)
    Reducto parse -> regex segmentation        (no Anthropic key, or Claude failed)
    local extraction -> regex segmentation     (no Reducto key, other file types, or Reducto failed)

Adapter failures are printed and recovered; only local extraction errors escape.
"""

import requests

from .config import ANTHROPIC_API_KEY, REDUCTO_API_KEY
from .extractors import extract_text
from .llm import LLMError, structure_document
from .models import ExtractionResult
from .reducto import ReductoError, parse_document, should_use_reducto
from .segmenter import extract_requests, normalize_text


def _local(content: bytes, filename: str, content_type: str) -> ExtractionResult:
    text = normalize_text(extract_text(content, filename, content_type))
    return ExtractionResult(text=text, requests=extract_requests(text), source="local")


def _structure(text: str) -> ExtractionResult:
    result = ExtractionResult(text=text, source="reducto")
    if not ANTHROPIC_API_KEY:
        print("  No Anthropic key configured, using regex extraction.")
        result.requests = extract_requests(text)
        return result

    try:
        print("  Using Claude to clean and structure text...")
        items, cleaned = structure_document(text)
    except LLMError as e:
        print(f"  Claude structuring failed, falling back to regex: {e}")
        result.requests = extract_requests(text)
        return result

    if cleaned:
        result.text = cleaned
    if items:
        print(f"  Claude extracted {len(items)} requests.")
        result.requests = items
        result.structured_by = "llm"
    else:
        print("  Claude returned no requests, falling back to regex.")
        result.requests = extract_requests(result.text)
    return result


def process_document(
    content: bytes,
    filename: str,
    content_type: str = "",
    progress_callback=None,
) -> ExtractionResult:
    """Turn an uploaded file into full text plus an ordered request list."""

    def progress(step, total, msg):
        if progress_callback:
            progress_callback(step, total, msg)
        else:
            print(msg)

    if should_use_reducto(filename, content_type, api_key=REDUCTO_API_KEY):
        progress(1, 2, "[Step 1/2] Parsing with Reducto...")
        try:
            text = normalize_text(parse_document(content, filename, content_type, api_key=REDUCTO_API_KEY))
        except (ReductoError, requests.RequestException, ValueError) as e:
            print(f"  Reducto parsing failed, falling back to local: {e}")
        else:
            progress(2, 2, "[Step 2/2] Structuring requests...")
            return _structure(text)

    progress(1, 2, "[Step 1/2] Extracting text locally...")
    result = _local(content, filename, content_type)
    progress(2, 2, f"[Step 2/2] Found {len(result.requests)} requests")
    return result
