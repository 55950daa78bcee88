"""Client for the Reducto hosted document parser (upload, then parse)."""

import json

import requests

from .config import HTTP_TIMEOUT, REDUCTO_API_KEY, REDUCTO_BASE_URL, REDUCTO_CHUNK_MODE
from .extractors import detect_kind


class ReductoError(RuntimeError):
    pass


def should_use_reducto(filename: str, content_type: str = "", api_key: str = REDUCTO_API_KEY) -> bool:
    """Reducto is only tried for PDF/DOCX uploads and only when a key is configured."""
    if not api_key:
        return False
    try:
        return detect_kind(filename, content_type) in ("pdf", "docx")
    except ValueError:
        return False


def upload(
    content: bytes,
    filename: str,
    content_type: str = "",
    api_key: str = REDUCTO_API_KEY,
    base_url: str = REDUCTO_BASE_URL,
) -> str:
    """Upload a file and return Reducto's file_id."""
    resp = requests.post(
        f"{base_url}/upload",
        headers={"Authorization": f"Bearer {api_key}"},
        files={"file": (filename, content, content_type or "application/octet-stream")},
        timeout=HTTP_TIMEOUT,
    )
    if not resp.ok:
        raise ReductoError(f"Reducto upload failed: {resp.status_code} {resp.text}")

    payload = resp.json()
    file_id = payload.get("file_id") if isinstance(payload, dict) else None
    if not file_id or not isinstance(file_id, str):
        raise ReductoError("Reducto upload did not return a file_id")
    return file_id


def _result_to_text(payload) -> str:
    if not isinstance(payload, dict):
        raise ReductoError(f"Unexpected Reducto parse response: {type(payload).__name__}")
    result = payload.get("result")
    if not result:
        return json.dumps(payload)
    if isinstance(result, str):
        return result
    chunks = result.get("chunks") if isinstance(result, dict) else None
    if isinstance(chunks, list):
        return "\n\n".join(str(c.get("content") or "") for c in chunks if isinstance(c, dict))
    return json.dumps(result)


def parse(
    file_id: str,
    chunk_mode: str = REDUCTO_CHUNK_MODE,
    api_key: str = REDUCTO_API_KEY,
    base_url: str = REDUCTO_BASE_URL,
) -> str:
    """Parse a previously uploaded file and return its text.

    Section-chunked results are joined with blank lines.
    """
    resp = requests.post(
        f"{base_url}/parse",
        headers={
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        },
        json={
            "input": file_id,
            "retrieval": {"chunking": {"chunk_mode": chunk_mode}},
        },
        timeout=HTTP_TIMEOUT,
    )
    if not resp.ok:
        raise ReductoError(f"Reducto parse failed: {resp.status_code} {resp.text}")
    return _result_to_text(resp.json())


def parse_document(
    content: bytes,
    filename: str,
    content_type: str = "",
    api_key: str = REDUCTO_API_KEY,
    base_url: str = REDUCTO_BASE_URL,
) -> str:
    file_id = upload(content, filename, content_type, api_key=api_key, base_url=base_url)
    print(f"  Reducto upload ok, file_id: {file_id}")
    return parse(file_id, api_key=api_key, base_url=base_url)
