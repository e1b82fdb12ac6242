"""
Text Extractors Module - Modular document format handlers.

This module provides a plug-and-play architecture for text extraction
from the supported document formats using the Strategy pattern.

To add support for a new format:
1. Add its MIME type to DocumentFormat
2. Create a new extractor class inheriting from BaseTextExtractor
3. Register it in TextExtractorFactory
"""
from .base import BaseTextExtractor
from .factory import TextExtractorFactory
from .pdf_extractor import PDFExtractor
from .docx_extractor import DOCXExtractor
from .doc_extractor import DOCExtractor
from .text_extractor import TextExtractor

__all__ = [
    "BaseTextExtractor",
    "TextExtractorFactory",
    "PDFExtractor",
    "DOCXExtractor",
    "DOCExtractor",
    "TextExtractor",
]
