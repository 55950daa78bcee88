"""Output generation: PDF and Word exports of drafted responses, rich terminal summary."""

import io
from pathlib import Path

from .models import ExtractionResult, RequestItem
from .objections import suggest_production_filename

EXPORT_TITLE = "RESPONSES TO REQUEST FOR PRODUCTION"

PAGE_MARGIN = 50
BOTTOM_MARGIN = 60  # start a new page once the cursor drops below this
LEADING = 13


def export_filename(file_name: str, ext: str) -> str:
    """'Request For Production.pdf' -> 'Request For Production_responses.<ext>'."""
    stem = Path(file_name or "Request For Production").stem
    return f"{stem}_responses.{ext}"


def export_pdf(pairs: list[tuple[RequestItem, str]], title: str = EXPORT_TITLE) -> bytes:
    """Render (request, response) pairs as a paginated PDF."""
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.utils import simpleSplit
    from reportlab.pdfgen import canvas

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    width, height = A4
    max_width = width - 2 * PAGE_MARGIN
    y = height - PAGE_MARGIN

    def ensure_room(y):
        if y < BOTTOM_MARGIN:
            c.showPage()
            return height - PAGE_MARGIN
        return y

    def write_wrapped(text, y, font, size):
        c.setFont(font, size)
        for ln in simpleSplit(text, font, size, max_width) or [""]:
            y = ensure_room(y)
            c.drawString(PAGE_MARGIN, y, ln)
            y -= LEADING
        return y

    c.setFont("Helvetica-Bold", 16)
    c.drawString(PAGE_MARGIN, y, title)
    y -= 36

    for req, response in pairs:
        y = ensure_room(y)
        c.setFont("Helvetica-Bold", 11)
        c.drawString(PAGE_MARGIN, y, f"REQUEST NO. {req.id}")
        y -= 18

        for para in req.text.split("\n"):
            y = write_wrapped(para, y, "Helvetica-Oblique", 10)
        y -= 10

        y = ensure_room(y)
        c.setFont("Helvetica-Bold", 10)
        c.drawString(PAGE_MARGIN, y, "RESPONSE:")
        y -= 14

        for para in response.split("\n"):
            y = write_wrapped(para, y, "Helvetica", 10)
        y -= 4
        y = write_wrapped(f"Documents produced: {suggest_production_filename(req.text)}", y, "Helvetica", 9)
        y -= 20

    c.showPage()
    c.save()
    return buf.getvalue()


def export_docx(pairs: list[tuple[RequestItem, str]], title: str = EXPORT_TITLE) -> bytes:
    """Render (request, response) pairs as a Word document."""
    from docx import Document
    from docx.shared import Pt

    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = "Times New Roman"
    style.font.size = Pt(12)

    doc.add_heading(title, level=1)
    for req, response in pairs:
        doc.add_heading(f"REQUEST NO. {req.id}", level=2)
        req_para = doc.add_paragraph()
        req_para.add_run(req.text).italic = True

        resp_para = doc.add_paragraph()
        resp_para.add_run("RESPONSE: ").bold = True
        resp_para.add_run(response)

        docs_para = doc.add_paragraph()
        docs_para.add_run("DOCUMENTS PRODUCED: ").bold = True
        docs_para.add_run(suggest_production_filename(req.text))

    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def print_rich_summary(result: ExtractionResult, file_name: str = "") -> None:
    from rich import box
    from rich.console import Console
    from rich.markup import escape
    from rich.panel import Panel
    from rich.table import Table

    console = Console()
    console.print()
    summary_text = (
        f"[bold]File:[/bold] {file_name or 'N/A'}\n"
        f"[bold]Text source:[/bold] {result.source}  "
        f"[bold]Segmented by:[/bold] {result.structured_by}\n"
        f"[bold]Requests found:[/bold] {len(result.requests)}  "
        f"[bold]Characters:[/bold] {len(result.text)}"
    )
    console.print(Panel(summary_text, title="RFP Extraction Summary", border_style="blue", expand=False))

    if not result.requests:
        return

    table = Table(title="Requests", box=box.ROUNDED, show_lines=True)
    table.add_column("No.", style="bold", width=8)
    table.add_column("Request", width=90)
    for req in result.requests:
        text = req.text[:200] + "..." if len(req.text) > 200 else req.text
        table.add_row(str(req.id), escape(text))
    console.print(table)
    console.print()
