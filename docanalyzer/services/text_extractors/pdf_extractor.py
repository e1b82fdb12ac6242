"""
PDF Text Extractor.

Extracts text from PDF files using the pypdf-backed PDF parser.
"""
from typing import Optional
from .base import BaseTextExtractor
from ...domain.value_objects import DocumentFormat
from ...utils.pdf_parser import PDFOptions, parse_pdf_content
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class PDFExtractor(BaseTextExtractor):
    """Extractor for PDF files."""

    document_format = DocumentFormat.PDF
    format_name = "PDF"
    required_library = "pypdf"

    def __init__(self, options: Optional[PDFOptions] = None):
        super().__init__()
        # All pages in one string, newline between pages, whitespace collapsed
        self.options = options or PDFOptions(
            include_page_numbers=False,
            page_break_separator="\n",
            preserve_whitespace=False,
        )

    def extract(self, file_bytes: bytes) -> str:
        return parse_pdf_content(file_bytes, self.options)
