"""
Text Extractor Factory.

Manages registration and retrieval of text extractors for the supported
document formats. Uses the Factory pattern to provide plug-and-play
text extraction keyed by DocumentFormat.
"""
from typing import Dict, Optional
from .base import BaseTextExtractor
from .pdf_extractor import PDFExtractor
from .docx_extractor import DOCXExtractor
from .doc_extractor import DOCExtractor
from .text_extractor import TextExtractor
from ...api.exceptions import ExtractionError
from ...domain.value_objects import DocumentFormat
from ...core.logging_config import get_logger

logger = get_logger(__name__)

EXTRACTION_FAILED_MESSAGE = "Failed to extract text from document"


class TextExtractorFactory:
    """
    Factory for managing text extractors.

    Provides a centralized registry of extractors and easy extension
    for new document formats.
    """

    _extractors: Dict[DocumentFormat, BaseTextExtractor] = {}
    _initialized = False

    @classmethod
    def _initialize(cls):
        """Initialize default extractors."""
        if cls._initialized:
            return

        # Register default extractors (skip_init=True to avoid recursion)
        cls.register(PDFExtractor(), skip_init=True)
        cls.register(DOCXExtractor(), skip_init=True)
        cls.register(DOCExtractor(), skip_init=True)
        cls.register(TextExtractor(), skip_init=True)

        cls._initialized = True
        logger.info(f"TextExtractorFactory initialized with {len(cls._extractors)} extractors")

    @classmethod
    def register(cls, extractor: BaseTextExtractor, skip_init: bool = False):
        """
        Register a text extractor.

        Args:
            extractor: Text extractor instance to register
            skip_init: If True, skip initialization check (used internally)
        """
        if not skip_init:
            cls._initialize()
        document_format = extractor.document_format

        if document_format in cls._extractors:
            logger.warning(f"Overriding existing extractor for {document_format.name}")

        cls._extractors[document_format] = extractor
        logger.debug(f"Registered extractor for {document_format.mime_type}: {extractor.format_name}")

    @classmethod
    def get_extractor(cls, document_format: DocumentFormat) -> Optional[BaseTextExtractor]:
        cls._initialize()
        return cls._extractors.get(document_format)

    @classmethod
    def extract_text(cls, file_bytes: bytes, mime_type: str, filename: str = "") -> str:
        """
        Extract text from file content using the extractor for its declared type.

        Args:
            file_bytes: File content as bytes
            mime_type: Declared MIME type of the upload
            filename: Display name used in log messages

        Returns:
            Extracted text content

        Raises:
            UnsupportedTypeError: If the MIME type is not supported
            ExtractionError: If the underlying library fails
        """
        document_format = DocumentFormat.from_mime_type(mime_type)
        extractor = cls.get_extractor(document_format)

        if extractor is None:
            raise ExtractionError(f"No extractor registered for {document_format.name}")

        if not extractor.is_available():
            error_message = extractor.get_error_message()
            logger.warning(f"{extractor.format_name} extraction unavailable for {filename}: {error_message}")
            raise ExtractionError(error_message)

        try:
            logger.debug(f"Extracting text from {filename} using {extractor.format_name} extractor")
            text_content = extractor.extract(file_bytes)
        except ExtractionError:
            raise
        except Exception as e:
            # The cause stays in the logs; callers only see the generic message
            logger.error(
                f"Error extracting text from {filename} ({extractor.format_name}): {e}",
                exc_info=True
            )
            raise ExtractionError(EXTRACTION_FAILED_MESSAGE) from e

        logger.info(f"Extracted {len(text_content)} characters from {filename} ({extractor.format_name})")
        return text_content

    @classmethod
    def get_supported_formats(cls) -> list:
        cls._initialize()
        return sorted(extractor.format_name for extractor in cls._extractors.values())
