#!/usr/bin/env python3
"""
RFP Responder

Reads a Request for Production (PDF, DOCX or TXT), splits it into numbered
requests, optionally drafts a response to each one, and writes the
responses out as PDF or Word.

Usage:
    python main.py <file> [--draft] [--export pdf|docx]

Reducto and Claude are used when REDUCTO_API_KEY / ANTHROPIC_API_KEY are set
(in the environment or a .env file); otherwise everything runs locally.
"""

import mimetypes
import sys
from pathlib import Path

from rfp_responder.config import ANTHROPIC_API_KEY, LLM_MODEL, OUTPUT_DIR
from rfp_responder.llm import LLMError
from rfp_responder.objections import STANDARD_RESPONSE
from rfp_responder.output import export_docx, export_filename, export_pdf, print_rich_summary
from rfp_responder.pipeline import process_document
from rfp_responder.workspace import WorkspaceState

BASE_DIR = Path(__file__).parent


def main() -> None:
    # ---- Parse args ----
    args = sys.argv[1:]
    if not args:
        print("Usage: python main.py <file> [--draft] [--export pdf|docx]")
        print("\nExamples:")
        print("  python main.py rfp.pdf                       # List the requests found")
        print("  python main.py rfp.docx --draft --export pdf # Draft every response, write a PDF")
        sys.exit(0)

    input_arg = None
    export_fmt = None
    do_draft = False
    i = 0
    while i < len(args):
        if args[i] == "--export" and i + 1 < len(args):
            export_fmt = args[i + 1].lower()
            if export_fmt not in ("pdf", "docx"):
                print(f"Error: --export must be pdf or docx (got '{export_fmt}')")
                sys.exit(1)
            i += 2
        elif args[i] == "--draft":
            do_draft = True
            i += 1
        else:
            input_arg = args[i]
            i += 1

    if not input_arg:
        print("Error: no input file given")
        sys.exit(1)

    input_path = Path(input_arg)
    if not input_path.is_absolute():
        input_path = BASE_DIR / input_path
    if not input_path.exists():
        print(f"Error: File not found: {input_path}")
        sys.exit(1)

    print("RFP Responder")
    print(f"Input: {input_path}")
    print()

    content_type = mimetypes.guess_type(input_path.name)[0] or ""
    result = process_document(input_path.read_bytes(), input_path.name, content_type)
    print_rich_summary(result, input_path.name)

    workspace = WorkspaceState(result.text, result.requests, input_path.name)

    if do_draft:
        if ANTHROPIC_API_KEY:
            print(f"Drafting {len(result.requests)} responses with {LLM_MODEL}...")
            for req in workspace.requests:
                try:
                    workspace.refine(req.id)
                    print(f"  [{req.id}] {workspace.response(req.id)}")
                except LLMError as e:
                    print(f"  [{req.id}] Drafting failed: {e}")
        else:
            print("Warning: ANTHROPIC_API_KEY not set. Using the standard production response.")
            for req in workspace.requests:
                workspace.set_response(req.id, STANDARD_RESPONSE)

    if export_fmt:
        exporter = export_pdf if export_fmt == "pdf" else export_docx
        OUTPUT_DIR.mkdir(exist_ok=True)
        out_path = OUTPUT_DIR / export_filename(input_path.name, export_fmt)
        out_path.write_bytes(exporter(workspace.pairs()))
        print(f"  Responses written to: {out_path}")


if __name__ == "__main__":
    main()
