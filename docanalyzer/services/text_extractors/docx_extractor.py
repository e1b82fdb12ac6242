"""
DOCX Text Extractor.

Extracts raw text from DOCX files using python-docx library.
"""
import io
from .base import BaseTextExtractor
from ...domain.value_objects import DocumentFormat
from ...core.logging_config import get_logger

logger = get_logger(__name__)

# Check if python-docx is available
try:
    from docx import Document as DocxDocument
    DOCX_AVAILABLE = True
except ImportError:
    DOCX_AVAILABLE = False
    logger.warning("python-docx not installed. DOCX text extraction will fail.")


def extract_docx_text(file_bytes: bytes) -> str:
    """
    Pull the raw text out of an OOXML Word container.

    Paragraph text comes first, one paragraph per line, followed by table rows
    with non-empty cells joined by " | ".
    """
    doc = DocxDocument(io.BytesIO(file_bytes))
    lines = [paragraph.text for paragraph in doc.paragraphs]

    for table in doc.tables:
        for row in table.rows:
            row_text = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if row_text:
                lines.append(" | ".join(row_text))

    return "\n".join(lines)


class DOCXExtractor(BaseTextExtractor):
    """Extractor for DOCX files."""

    document_format = DocumentFormat.DOCX
    format_name = "DOCX"
    required_library = "python-docx"

    def _check_availability(self) -> bool:
        return DOCX_AVAILABLE

    def extract(self, file_bytes: bytes) -> str:
        self.ensure_available()
        return extract_docx_text(file_bytes)
