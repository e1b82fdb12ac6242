"""
Base Text Extractor.

One subclass per accepted upload format. Subclasses declare the format they
handle and, when they depend on an optional parser, the distribution that
provides it.
"""
from abc import ABC, abstractmethod
from typing import Optional

from ...api.exceptions import ExtractionError
from ...domain.value_objects import DocumentFormat


class BaseTextExtractor(ABC):
    """
    Turns the raw bytes of one document format into plain text.

    Class attributes:
        document_format: Format served by the extractor, used as registry key
        format_name: Short label for log lines ('PDF', 'DOCX', ...)
        required_library: pip name of the parser the extractor needs, if optional
    """

    document_format: DocumentFormat
    format_name: str = ""
    required_library: Optional[str] = None

    def __init__(self):
        self._available = self._check_availability()

    @abstractmethod
    def extract(self, file_bytes: bytes) -> str:
        """
        Return the document text.

        The result may be empty; whether empty text is an error is decided by
        the analysis step, not here.

        Raises:
            ExtractionError: If the parser is missing or the document is unreadable
        """

    def _check_availability(self) -> bool:
        return True

    def is_available(self) -> bool:
        return self._available

    def get_error_message(self) -> str:
        if self.required_library:
            return (
                f"{self.format_name} extraction requires the '{self.required_library}' library: "
                f"pip install {self.required_library}"
            )
        return f"{self.format_name} extraction is not available"

    def ensure_available(self) -> None:
        if not self.is_available():
            raise ExtractionError(self.get_error_message())
