"""Text normalization and regex segmentation of discovery requests."""

import re

from .config import MAX_HEADERLESS_LINES
from .models import RequestId, RequestItem

FALLBACK_MESSAGE = (
    "Could not automatically detect 'REQUEST NO.' format. "
    "Full text provided in document view."
)

# "REQUEST NO. 3", "REQUEST FOR PRODUCTION NO. 3", "REQUEST NUMBER 4(a)", "REQUEST 5".
# The bare "REQUEST 5" form also matches prose such as "REQUEST 3 copies of ...".
_HEADER_RE = re.compile(
    r"REQUEST\s+(?:FOR\s+PRODUCTION\s+)?(?:NO\.|NUMBER)?\s*(\d+(?:\([a-z]\))?)",
    re.IGNORECASE,
)

_LEADING_PUNCT_RE = re.compile(r"^[.:\-\s]+")


def normalize_text(text: str) -> str:
    """Convert CRLF line endings to LF and trim surrounding whitespace."""
    return text.replace("\r\n", "\n").strip()


def _parse_id(raw: str) -> RequestId:
    # Sub-parts keep their letter so "4(a)" and "4(b)" stay distinct
    return int(raw) if raw.isdigit() else raw


def extract_requests(text: str) -> list[RequestItem]:
    """Split document text into numbered requests using the header pattern.

    Each request body runs from the end of its header to the start of the
    next header (or end of text). When no header is found, short documents
    get a single placeholder request and long ones get none.
    """
    normalized = normalize_text(text)
    matches = list(_HEADER_RE.finditer(normalized))

    requests: list[RequestItem] = []
    if matches:
        for i, m in enumerate(matches):
            end = matches[i + 1].start() if i + 1 < len(matches) else len(normalized)
            body = normalized[m.end():end].strip()
            body = _LEADING_PUNCT_RE.sub("", body).strip()
            req_id = _parse_id(m.group(1))
            requests.append(RequestItem(
                id=req_id,
                text=body or f"[Empty Request Content for Request {req_id}]",
            ))
    else:
        lines = [ln for ln in normalized.split("\n") if ln.strip()]
        if 0 < len(lines) < MAX_HEADERLESS_LINES:
            requests.append(RequestItem(id=1, text=FALLBACK_MESSAGE))

    return dedupe_requests(requests)


def dedupe_requests(requests: list[RequestItem]) -> list[RequestItem]:
    """Drop repeated ids, keeping the first occurrence in order."""
    seen = set()
    unique = []
    for req in requests:
        if req.id in seen:
            continue
        seen.add(req.id)
        unique.append(req)
    return unique


def locate_request(document_text: str, request_text: str) -> list[tuple[int, int]]:
    """Return every (start, end) span where the request text appears verbatim."""
    if not document_text or not request_text:
        return []
    spans = []
    start = document_text.find(request_text)
    while start != -1:
        end = start + len(request_text)
        spans.append((start, end))
        start = document_text.find(request_text, end)
    return spans
