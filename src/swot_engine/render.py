"""Display groupings and text/Markdown/JSON/PDF renderings of an AnalysisResult."""

import json
from dataclasses import dataclass
from io import BytesIO
from typing import List, Tuple

from swot_engine.schemas import AnalysisResult

# (key, title, color tag) in display order.
CATEGORY_STYLES: Tuple[Tuple[str, str, str], ...] = (
    ("strengths", "Strengths", "emerald"),
    ("weaknesses", "Weaknesses", "amber"),
    ("opportunities", "Opportunities", "blue"),
    ("threats", "Threats", "red"),
)

REPORT_TITLE = "Ai SWOT Analysis"


@dataclass(frozen=True)
class CategoryGroup:
    key: str
    title: str
    color: str
    items: Tuple[str, ...]

    @property
    def count(self) -> int:
        return len(self.items)


def group(result: AnalysisResult) -> List[CategoryGroup]:
    return [
        CategoryGroup(key=key, title=title, color=color, items=tuple(result.items_for(key)))
        for key, title, color in CATEGORY_STYLES
    ]


def serialize(result: AnalysisResult) -> str:
    """Plain-text rendering used for the clipboard and the TXT download."""
    parts = [f"{REPORT_TITLE}\nSummary: {result.summary}"]
    for key, title, _ in CATEGORY_STYLES:
        parts.append(f"{title.upper()}:\n" + "\n".join(result.items_for(key)))
    return "\n\n".join(parts)


def to_markdown(result: AnalysisResult) -> str:
    def section(name: str, items: List[str]) -> str:
        lines = [f"## {name}"]
        for x in items:
            lines.append(f"- {x}")
        return "\n".join(lines)

    parts = [f"# {REPORT_TITLE}", "## Summary", result.summary]
    for key, title, _ in CATEGORY_STYLES:
        parts.append(section(title, result.items_for(key)))

    return "\n\n".join(parts).strip() + "\n"


def to_json(result: AnalysisResult) -> str:
    return json.dumps(result.model_dump(), ensure_ascii=False, indent=2)


def to_pdf_bytes(result: AnalysisResult) -> bytes:
    """Create a simple PDF of the serialized analysis.

    Renders plain text lines only, wrapped to the printable width of the page.
    """

    from reportlab.lib.pagesizes import A4
    from reportlab.pdfgen import canvas

    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    width, height = A4

    lines = serialize(result).splitlines()
    title, body = lines[0], lines[1:]

    # Title
    c.setFont("Helvetica-Bold", 14)
    c.drawString(40, height - 50, title)

    # Body
    c.setFont("Helvetica", 10)
    x = 40
    max_width = width - 2 * x
    y = height - 80
    line_height = 12

    def draw(text: str) -> None:
        nonlocal y
        if y < 50:
            c.showPage()
            c.setFont("Helvetica", 10)
            y = height - 50
        c.drawString(x, y, text)
        y -= line_height

    for line in body or [""]:
        for part in wrap_line(line, "Helvetica", 10, max_width):
            draw(part)

    c.showPage()
    c.save()
    return buf.getvalue()


def wrap_line(text: str, font: str, size: float, max_width: float) -> List[str]:
    """Split one line into pieces no wider than max_width at the given font.

    Breaks between words; a single word wider than the page is cut by width.
    """
    from reportlab.lib.utils import simpleSplit
    from reportlab.pdfbase.pdfmetrics import stringWidth

    pieces: List[str] = []
    for part in simpleSplit(text, font, size, max_width) or [""]:
        while stringWidth(part, font, size) > max_width:
            cut = len(part) - 1
            while cut > 1 and stringWidth(part[:cut], font, size) > max_width:
                cut -= 1
            pieces.append(part[:cut])
            part = part[cut:]
        pieces.append(part)
    return pieces
