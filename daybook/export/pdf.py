"""
PDF report rendering.

Lays out journal entries as bordered blocks on A4 pages with a
page-numbered footer.
"""

import io
from datetime import datetime
from typing import Iterable, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from daybook.core.models import JournalEntry

MARGIN = 15 * mm

# Table rows cannot split across pages, so long paragraphs are cut into pieces
WORDS_PER_BLOCK = 150


class NumberedCanvas(canvas.Canvas):
    """Canvas that stamps "Page N / M" once the page count is known."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        num_pages = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(num_pages)
            super().showPage()
        super().save()

    def _draw_footer(self, page_count: int):
        width, _ = self._pagesize
        self.setFont("Helvetica", 9)
        self.drawCentredString(width / 2, MARGIN / 2, f"Page {self._pageNumber} / {page_count}")


def _content_blocks(content: Optional[str]) -> List[str]:
    """Split content into escaped paragraph chunks small enough for one table row."""
    blocks = []

    for line in (content or "").splitlines():
        words = line.split()
        for start in range(0, len(words), WORDS_PER_BLOCK):
            blocks.append(escape(" ".join(words[start:start + WORDS_PER_BLOCK])))

    return blocks


def build_pdf(
    entries: Iterable[JournalEntry],
    title: str = "Journal Export",
    generated_at: Optional[datetime] = None,
) -> bytes:
    """
    Render entries into a PDF document.

    Args:
        entries: Entries in the order they should appear
        title: Report heading
        generated_at: Timestamp printed under the heading (defaults to now)

    Returns:
        PDF file contents
    """
    if generated_at is None:
        generated_at = datetime.now()

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle("ReportTitle", parent=styles["Heading1"], fontSize=18, spaceAfter=6)
    small_style = ParagraphStyle("ReportSmall", parent=styles["Normal"], fontSize=10, leading=12)
    heading_style = ParagraphStyle(
        "EntryHeading", parent=styles["Normal"], fontName="Helvetica-Bold", fontSize=11, leading=14
    )
    body_style = ParagraphStyle("EntryBody", parent=styles["Normal"], fontSize=11, leading=14)

    flow = [
        Paragraph(escape(title), title_style),
        Paragraph(f"Generated: {generated_at:%Y-%m-%d %H:%M}", small_style),
        Spacer(1, 10),
    ]

    width = A4[0] - 2 * MARGIN

    for entry in entries:
        rows = [
            [Paragraph(escape(f"{entry.entry_date:%Y-%m-%d} | {entry.title or ''}"), heading_style)],
            [Paragraph(
                escape(
                    f"Mood: {entry.primary_mood or '-'} | "
                    f"Category: {entry.category or '-'} | "
                    f"Words: {entry.word_count or 0}"
                ),
                small_style,
            )],
        ]
        rows.extend([Paragraph(block, body_style)] for block in _content_blocks(entry.content))

        table = Table(rows, colWidths=[width])
        table.setStyle(TableStyle([
            ("BOX", (0, 0), (-1, -1), 1, colors.black),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 10),
            ("RIGHTPADDING", (0, 0), (-1, -1), 10),
            ("TOPPADDING", (0, 0), (-1, -1), 2),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
            ("TOPPADDING", (0, 0), (-1, 0), 10),
            ("BOTTOMPADDING", (0, -1), (-1, -1), 10),
        ]))

        flow.append(table)
        flow.append(Spacer(1, 10))

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        title=title,
    )
    doc.build(flow, canvasmaker=NumberedCanvas)

    return buf.getvalue()
