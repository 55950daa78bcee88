"""FastAPI backend for the RFP Responder.

Upload a Request for Production, get back its text and numbered requests,
draft responses one request at a time, and export the finished set.
"""

import os
import traceback
from pathlib import Path

from fastapi import Body, FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

# Ensure .env is loaded before importing rfp_responder
BASE_DIR = Path(__file__).parent
_env_path = BASE_DIR / ".env"
if _env_path.exists():
    for _line in _env_path.read_text().splitlines():
        _line = _line.strip()
        if _line and not _line.startswith("#") and "=" in _line:
            _k, _, _v = _line.partition("=")
            os.environ.setdefault(_k.strip(), _v.strip().strip("\"'"))

from rfp_responder.config import ANTHROPIC_API_KEY, CORS_ORIGINS, LLM_MODEL, REDUCTO_API_KEY
from rfp_responder.drafting import OBJECTION_TYPES, draft_response
from rfp_responder.models import RequestItem
from rfp_responder.objections import compose_response, parse_toggles
from rfp_responder.output import export_docx, export_filename, export_pdf
from rfp_responder.pipeline import process_document
from rfp_responder.workspace import NO_RESPONSE

app = FastAPI(title="RFP Responder API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

_EXPORTERS = {
    "pdf": (export_pdf, "application/pdf"),
    "docx": (
        export_docx,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ),
}


def _error(status: int, error: str, details: str | None = None) -> JSONResponse:
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status, content=content)


# ---------------------------------------------------------------------------
# GET /api/config — adapter availability check
# ---------------------------------------------------------------------------
@app.get("/api/config")
def api_config():
    return {
        "llm_available": bool(ANTHROPIC_API_KEY),
        "llm_model": LLM_MODEL,
        "reducto_available": bool(REDUCTO_API_KEY),
        "objection_types": OBJECTION_TYPES,
    }


# ---------------------------------------------------------------------------
# POST /api/process-document — extract text and split into requests
# ---------------------------------------------------------------------------
@app.post("/api/process-document")
async def api_process_document(file: UploadFile | None = File(None)):
    if file is None:
        return _error(400, "No file uploaded")

    try:
        content = await file.read()
        result = process_document(
            content,
            filename=file.filename or "",
            content_type=file.content_type or "",
        )
    except Exception as e:
        print(f"  Error processing document: {e}")
        traceback.print_exc()
        return _error(500, "Failed to process document", str(e))

    return result.to_dict()


# ---------------------------------------------------------------------------
# POST /api/refine-response — draft one response with Claude
# ---------------------------------------------------------------------------
@app.post("/api/refine-response")
def api_refine_response(body: dict = Body(...)):
    for field in ("requestText", "currentResponse", "objectionType", "instruction"):
        if body.get(field) is not None and not isinstance(body[field], str):
            return _error(400, f"{field} must be a string")

    request_text = (body.get("requestText") or "").strip()
    if not request_text:
        return _error(400, "Request text is required")

    try:
        text = draft_response(
            request_text,
            current_response=body.get("currentResponse") or "",
            objection_type=body.get("objectionType"),
            instruction=body.get("instruction") or "",
        )
    except Exception as e:
        print(f"  Error generating AI response: {e}")
        return _error(500, "Failed to generate response", str(e))

    return {"success": True, "text": text}


# ---------------------------------------------------------------------------
# POST /api/compose-response — deterministic objection boilerplate
# ---------------------------------------------------------------------------
@app.post("/api/compose-response")
def api_compose_response(body: dict = Body(...)):
    try:
        toggles = parse_toggles(body.get("toggles") or {})
    except KeyError as e:
        return _error(400, "Unknown objection toggle", str(e))
    return {"success": True, "text": compose_response(toggles)}


# ---------------------------------------------------------------------------
# POST /api/export/{fmt} — download responses as PDF or Word
# ---------------------------------------------------------------------------
@app.post("/api/export/{fmt}")
def api_export(fmt: str, body: dict = Body(...)):
    if fmt not in _EXPORTERS:
        return _error(400, f"Unsupported export format: {fmt}")

    pairs = []
    for item in body.get("items") or []:
        if not isinstance(item, dict) or item.get("id") is None:
            continue
        req = RequestItem(id=item["id"], text=item.get("text") or "")
        pairs.append((req, item.get("response") or NO_RESPONSE))

    exporter, media_type = _EXPORTERS[fmt]
    filename = export_filename(body.get("fileName") or "", fmt)
    return Response(
        content=exporter(pairs),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
