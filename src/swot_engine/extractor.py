"""
Plain-text extraction for uploaded documents.

Dispatch is by filename extension: ``.pdf`` goes through PyMuPDF, ``.docx``
through python-docx, everything else is decoded as text. Both parsing engines
are imported on first use, so a broken install surfaces as an
``ExtractionError`` for that upload rather than an import-time crash of the
whole page.
"""
from __future__ import annotations

import io
import logging
from typing import Any, Dict, List, Optional

from swot_engine.errors import ExtractionError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("pdf", "docx", "txt")


def file_extension(filename: str) -> str:
    name = (filename or "").strip()
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def extract(filename: str, data: bytes, max_bytes: Optional[int] = None) -> str:
    """
    Return the plain text of an uploaded file.

    Raises:
        ExtractionError: file too large, parsing engine unavailable, or a
            malformed document.
    """
    if max_bytes is not None and len(data) > max_bytes:
        raise ExtractionError(
            f"File is too large ({len(data) / (1024 * 1024):.1f} MB). "
            f"The limit is {max_bytes // (1024 * 1024)} MB."
        )

    ext = file_extension(filename)
    if ext == "pdf":
        text = extract_pdf_text(data)
    elif ext == "docx":
        text = extract_docx_text(data)
    else:
        text = decode_text(data)

    logger.info(f"Extracted {len(text)} characters from {ext or 'text'} upload")
    return text


# ------------------------------------------------------------------
# PDF
# ------------------------------------------------------------------

def _load_fitz():
    try:
        import fitz  # PyMuPDF
    except Exception as e:  # noqa: BLE001
        raise ExtractionError("PDF library not loaded yet.") from e
    return fitz


def page_text(page_dict: Dict[str, Any]) -> str:
    """Join every text span of one page with single spaces, in reading order."""
    fragments: List[str] = []
    for block in page_dict.get("blocks", []):
        if block.get("type") != 0:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                fragments.append(span.get("text", ""))
    return " ".join(fragments)


def extract_pdf_text(data: bytes) -> str:
    fitz = _load_fitz()
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        raise ExtractionError("Error parsing PDF.") from exc

    try:
        if doc.needs_pass:
            raise ExtractionError("PDF is password-protected. Please provide an unlocked copy.")
        full_text = ""
        for page in doc:
            full_text += page_text(page.get_text("dict")) + "\n"
    except ExtractionError:
        raise
    except Exception as exc:
        raise ExtractionError("Error parsing PDF.") from exc
    finally:
        doc.close()

    return full_text


# ------------------------------------------------------------------
# DOCX
# ------------------------------------------------------------------

def extract_docx_text(data: bytes) -> str:
    try:
        from docx import Document as DocxDocument
        from docx.table import Table
    except Exception as e:  # noqa: BLE001
        raise ExtractionError("Word library not loaded yet.") from e

    try:
        doc = DocxDocument(io.BytesIO(data))
    except Exception as exc:
        raise ExtractionError("Error parsing Word.") from exc

    # Body order: paragraphs and tables interleaved as they appear.
    lines: List[str] = []
    for block in doc.iter_inner_content():
        if isinstance(block, Table):
            lines.extend(table_rows(block))
        else:
            lines.append(block.text)
    return "\n".join(lines)


def table_rows(table: Any) -> List[str]:
    """One line per table row: the non-empty cell texts joined with " | "."""
    rows: List[str] = []
    for row in table.rows:
        cells = [cell.text.strip() for cell in row.cells]
        non_empty = [c for c in cells if c]
        if non_empty:
            rows.append(" | ".join(non_empty))
    return rows


# ------------------------------------------------------------------
# Plain text
# ------------------------------------------------------------------

def decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")
