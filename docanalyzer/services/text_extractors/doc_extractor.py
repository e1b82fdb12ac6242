"""
DOC Text Extractor.

Extracts text from files declared as application/msword. Browsers report that
type for both legacy binary .doc files and for .docx files on some systems, so
OOXML containers are routed to python-docx and only genuine binary documents
go through textract (requires antiword or LibreOffice on the host).
"""
import os
import tempfile
from .base import BaseTextExtractor
from .docx_extractor import DOCX_AVAILABLE, extract_docx_text
from ...api.exceptions import ExtractionError
from ...domain.value_objects import DocumentFormat
from ...core.logging_config import get_logger

logger = get_logger(__name__)

ZIP_SIGNATURE = b"PK\x03\x04"

# Check if textract is available
try:
    import textract
    TEXTRACT_AVAILABLE = True
except ImportError:
    TEXTRACT_AVAILABLE = False
    logger.info("DOC file support: textract not installed (optional). "
                "Binary .doc extraction requires: pip install textract "
                "(also requires system dependency: antiword or LibreOffice)")


class DOCExtractor(BaseTextExtractor):
    """Extractor for DOC (old Word format) files."""

    document_format = DocumentFormat.DOC
    format_name = "DOC"
    required_library = "textract"

    def _check_availability(self) -> bool:
        return TEXTRACT_AVAILABLE or DOCX_AVAILABLE

    def get_error_message(self) -> str:
        return f"{super().get_error_message()} (or convert the document to DOCX before uploading)"

    def extract(self, file_bytes: bytes) -> str:
        if file_bytes.startswith(ZIP_SIGNATURE) and DOCX_AVAILABLE:
            logger.debug("application/msword upload is an OOXML container, using python-docx")
            return extract_docx_text(file_bytes)

        if not TEXTRACT_AVAILABLE:
            raise ExtractionError(self.get_error_message())

        # textract works on paths, not buffers
        with tempfile.NamedTemporaryFile(delete=False, suffix=".doc") as tmp_file:
            tmp_file.write(file_bytes)
            tmp_path = tmp_file.name
        try:
            return textract.process(tmp_path, extension="doc").decode("utf-8")
        finally:
            os.unlink(tmp_path)
