"""
PDF text parser built on pypdf.

Collects the positioned text runs pypdf reports for every page and assembles
them into plain text, either in content-stream order or re-ordered by position
when layout preservation is requested.
"""
import io
import re
from dataclasses import dataclass
from functools import cmp_to_key
from typing import List, Optional, Union
from urllib.parse import unquote

from pypdf import PdfReader

from ..core.logging_config import get_logger

logger = get_logger(__name__)

# Vertical distances in PDF points (1/72 inch)
SAME_LINE_TOLERANCE = 1.5
LINE_BREAK_THRESHOLD = 8.0

_WHITESPACE_RE = re.compile(r"\s+")


class PDFParseError(Exception):
    """Raised when a PDF cannot be read or its text cannot be assembled."""
    pass


@dataclass
class PDFOptions:
    include_page_numbers: bool = False
    page_break_separator: str = "\n"
    preserve_layout: bool = False
    preserve_whitespace: bool = False
    max_pages: Optional[int] = None


@dataclass
class TextRun:
    """A piece of text drawn at a position on the page (origin bottom-left)."""
    text: str
    x: float
    y: float


def _decode_run(text: str) -> str:
    return unquote(text)


def _compare_runs(a: TextRun, b: TextRun) -> int:
    # Top to bottom, then left to right within a line
    if abs(a.y - b.y) < SAME_LINE_TOLERANCE:
        return (a.x > b.x) - (a.x < b.x)
    return (b.y > a.y) - (b.y < a.y)


def assemble_page_text(runs: List[TextRun], preserve_layout: bool = False,
                       preserve_whitespace: bool = False) -> str:
    """
    Join the text runs of one page.

    Every run is percent-decoded and followed by a space. In layout mode runs
    are sorted by position and a newline is inserted whenever the vertical
    position jumps by more than LINE_BREAK_THRESHOLD.
    """
    page_text = ""

    if preserve_layout:
        last_y = None
        for run in sorted(runs, key=cmp_to_key(_compare_runs)):
            if not run.text:
                continue
            if last_y is not None and abs(run.y - last_y) > LINE_BREAK_THRESHOLD:
                page_text += "\n"
            page_text += _decode_run(run.text) + " "
            last_y = run.y
    else:
        for run in runs:
            if run.text:
                page_text += _decode_run(run.text) + " "

    if preserve_whitespace:
        return page_text.strip()
    return _WHITESPACE_RE.sub(" ", page_text.strip())


def _collect_runs(page) -> List[TextRun]:
    runs: List[TextRun] = []

    def visitor(text, cm, tm, font_dict, font_size):
        if not text or not text.strip():
            return
        # Text-space origin mapped through the current transformation matrix
        x = cm[0] * tm[4] + cm[2] * tm[5] + cm[4]
        y = cm[1] * tm[4] + cm[3] * tm[5] + cm[5]
        runs.append(TextRun(text=text, x=float(x), y=float(y)))

    page.extract_text(visitor_text=visitor)
    return runs


def parse_pdf_content(pdf_source: Union[bytes, str], options: Optional[PDFOptions] = None) -> str:
    """
    Extract the text content of a PDF.

    Args:
        pdf_source: PDF data as bytes, or a filesystem path
        options: Parsing options (defaults: no page numbers, newline between pages)

    Returns:
        Extracted text, pages joined by options.page_break_separator

    Raises:
        PDFParseError: If the PDF cannot be read
    """
    options = options or PDFOptions()

    try:
        if isinstance(pdf_source, (bytes, bytearray)):
            reader = PdfReader(io.BytesIO(pdf_source))
        elif isinstance(pdf_source, str):
            reader = PdfReader(pdf_source)
        else:
            raise PDFParseError("Invalid PDF source. Expected bytes or file path.")
    except PDFParseError:
        raise
    except Exception as e:
        raise PDFParseError(f"PDF parsing error: {e}") from e

    pages = reader.pages
    if options.max_pages:
        pages = pages[:options.max_pages]

    extracted_text = ""
    try:
        for page_number, page in enumerate(pages, start=1):
            runs = _collect_runs(page)
            if not runs:
                continue

            page_text = assemble_page_text(
                runs,
                preserve_layout=options.preserve_layout,
                preserve_whitespace=options.preserve_whitespace,
            )
            if not page_text:
                continue

            if options.include_page_numbers:
                extracted_text += f"--- Page {page_number} ---\n{page_text}{options.page_break_separator}"
            else:
                extracted_text += page_text + options.page_break_separator
    except Exception as e:
        raise PDFParseError(f"Text processing error: {e}") from e

    logger.debug(f"Parsed {len(reader.pages)} PDF pages into {len(extracted_text)} characters")
    return extracted_text.strip()
