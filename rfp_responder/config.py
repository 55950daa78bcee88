"""Configuration constants, API keys, limits and timeouts."""

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Load .env if present
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).parent.parent
_env_path = BASE_DIR / ".env"
if _env_path.exists():
    for _line in _env_path.read_text().splitlines():
        _line = _line.strip()
        if _line and not _line.startswith("#") and "=" in _line:
            _k, _, _v = _line.partition("=")
            os.environ.setdefault(_k.strip(), _v.strip().strip("\"'"))

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
OUTPUT_DIR = BASE_DIR / "output"

# ---------------------------------------------------------------------------
# LLM Settings
# ---------------------------------------------------------------------------
ANTHROPIC_API_KEY = os.environ.get("ANTHROPIC_API_KEY", "")
LLM_MODEL = os.environ.get("LLM_MODEL", "claude-sonnet-4-20250514")
DRAFT_TEMPERATURE = 0.2
STRUCTURE_MAX_TOKENS = 16000
DRAFT_MAX_TOKENS = 400
MAX_STRUCTURE_CHARS = 100_000

# ---------------------------------------------------------------------------
# Reducto (hosted document parser)
# ---------------------------------------------------------------------------
REDUCTO_API_KEY = os.environ.get("REDUCTO_API_KEY", "")
REDUCTO_BASE_URL = os.environ.get("REDUCTO_BASE_URL", "https://platform.reducto.ai")
REDUCTO_CHUNK_MODE = "section"

# Applies to both Reducto and Anthropic calls
HTTP_TIMEOUT = float(os.environ.get("HTTP_TIMEOUT", "60"))

# ---------------------------------------------------------------------------
# Segmentation
# ---------------------------------------------------------------------------
MAX_HEADERLESS_LINES = 50

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(",")
    if o.strip()
]
