"""Streamlit workspace for drafting RFP responses."""

import os
from pathlib import Path

import streamlit as st

# Load .env
BASE_DIR = Path(__file__).parent
_env_path = BASE_DIR / ".env"
if _env_path.exists():
    for _line in _env_path.read_text().splitlines():
        _line = _line.strip()
        if _line and not _line.startswith("#") and "=" in _line:
            _k, _, _v = _line.partition("=")
            os.environ.setdefault(_k.strip(), _v.strip().strip("\"'"))

from rfp_responder.config import ANTHROPIC_API_KEY, REDUCTO_API_KEY
from rfp_responder.drafting import OBJECTION_TYPES
from rfp_responder.llm import LLMError
from rfp_responder.objections import OBJECTION_SENTENCES, QUICK_OBJECTIONS, suggest_production_filename
from rfp_responder.output import export_docx, export_filename, export_pdf
from rfp_responder.pipeline import process_document
from rfp_responder.segmenter import locate_request
from rfp_responder.workspace import RequestBusy, WorkspaceState

st.set_page_config(
    page_title="RFP Responder",
    page_icon="",
    layout="wide",
    initial_sidebar_state="expanded",
)


# ---------------------------------------------------------------------------
# SIDEBAR
# ---------------------------------------------------------------------------
st.sidebar.markdown("**RFP Responder**")
st.sidebar.caption(f"Claude: {'Available' if ANTHROPIC_API_KEY else 'Not configured'}")
st.sidebar.caption(f"Reducto: {'Available' if REDUCTO_API_KEY else 'Not configured (local parsing)'}")


# ---------------------------------------------------------------------------
# UPLOAD
# ---------------------------------------------------------------------------
st.title("Request for Production Workspace")

uploaded_file = st.file_uploader("Upload Request for Production", type=["pdf", "docx", "txt"])

if uploaded_file is not None and st.session_state.get("file_name") != uploaded_file.name:
    with st.spinner("Processing document..."):
        try:
            result = process_document(
                uploaded_file.getvalue(),
                uploaded_file.name,
                uploaded_file.type or "",
            )
        except Exception as e:
            st.error(f"Error processing file. Please ensure it is a valid PDF or DOCX. ({e})")
            st.stop()
    st.session_state["file_name"] = uploaded_file.name
    st.session_state["workspace"] = WorkspaceState(result.text, result.requests, uploaded_file.name)

workspace: WorkspaceState | None = st.session_state.get("workspace")
if workspace is None:
    st.info('Upload a document that contains "REQUEST NO. 1", etc.')
    st.stop()

if not workspace.requests:
    st.warning("No requests detected in this document.")


# ---------------------------------------------------------------------------
# WORKSPACE: document on the left, responses on the right
# ---------------------------------------------------------------------------
doc_col, resp_col = st.columns(2)

with resp_col:
    st.markdown(f"### Responses ({len(workspace.requests)})")
    ids = [r.id for r in workspace.requests]
    active_id = st.selectbox("Active request", ids, format_func=lambda i: f"REQUEST NO. {i}") if ids else None

    for req in workspace.requests:
        with st.expander(f"REQUEST NO. {req.id}", expanded=req.id == active_id):
            st.markdown(f"*{req.text}*")
            st.caption(f"Documents produced: {suggest_production_filename(req.text)}")

            key = f"resp_{req.id}"
            edited = st.text_area("Response", value=workspace.response(req.id), key=key, height=120)
            if edited != workspace.response(req.id):
                workspace.set_response(req.id, edited)

            quick_cols = st.columns(len(QUICK_OBJECTIONS))
            for col, label in zip(quick_cols, QUICK_OBJECTIONS):
                if col.button(label, key=f"quick_{req.id}_{label}"):
                    workspace.apply_quick_objection(req.id, label)
                    st.session_state.pop(key, None)
                    st.rerun()

            with st.popover("Objection toggles"):
                toggles = workspace.toggles(req.id)
                for name in OBJECTION_SENTENCES:
                    checked = st.checkbox(name.replace("_", " ").title(), value=toggles[name], key=f"tog_{req.id}_{name}")
                    if checked != toggles[name]:
                        workspace.toggle(req.id, name)
                        st.session_state.pop(key, None)
                        st.rerun()

            if ANTHROPIC_API_KEY:
                instruction = st.text_input(
                    "Instruction for Claude",
                    value=workspace.instruction(req.id),
                    key=f"instr_{req.id}",
                    placeholder='e.g. "5 years is too much, do 1 year"',
                )
                workspace.set_instruction(req.id, instruction)
                objection = st.selectbox("Objection (optional)", [""] + OBJECTION_TYPES, key=f"obj_{req.id}")

                if st.button("Draft with Claude", key=f"draft_{req.id}", disabled=workspace.is_loading(req.id)):
                    with st.spinner("Drafting..."):
                        try:
                            workspace.refine(req.id, objection_type=objection or None)
                        except RequestBusy:
                            st.warning("A draft for this request is already in progress.")
                        except LLMError as e:
                            st.error(f"Drafting did not complete: {e}")
                        else:
                            st.session_state.pop(key, None)
                            st.session_state.pop(f"instr_{req.id}", None)
                            st.rerun()

    st.markdown("---")
    c1, c2 = st.columns(2)
    c1.download_button(
        "Export PDF",
        data=export_pdf(workspace.pairs()),
        file_name=export_filename(workspace.file_name, "pdf"),
        mime="application/pdf",
        use_container_width=True,
    )
    c2.download_button(
        "Export Word",
        data=export_docx(workspace.pairs()),
        file_name=export_filename(workspace.file_name, "docx"),
        mime="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        use_container_width=True,
    )

with doc_col:
    st.markdown(f"### {workspace.file_name}")
    text = workspace.document_text
    if active_id is not None:
        spans = locate_request(text, workspace.request(active_id).text)
        if spans:
            start, end = spans[0]
            text = f"{text[:start]}**:orange-background[{text[start:end]}]**{text[end:]}"
    st.markdown(text.replace("\n", "  \n"))
