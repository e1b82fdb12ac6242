"""
Plain Text Extractor.

Reads text/plain uploads as UTF-8.
"""
from .base import BaseTextExtractor
from ...domain.value_objects import DocumentFormat


class TextExtractor(BaseTextExtractor):
    """Extractor for plain text files."""

    document_format = DocumentFormat.TXT
    format_name = "TXT"

    def extract(self, file_bytes: bytes) -> str:
        return file_bytes.decode("utf-8", errors="replace")
