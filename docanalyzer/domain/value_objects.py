"""
Value Objects - Immutable objects that represent domain concepts.
These have no identity and are compared by value.
"""
from enum import Enum
from typing import NewType

from ..api.exceptions import UnsupportedTypeError

# Relative path of a file inside temp storage, e.g. "3f2a...c1.pdf"
FilePath = NewType("FilePath", str)


class DocumentFormat(Enum):
    """Document formats accepted by the pipeline, keyed by declared MIME type."""

    PDF = "application/pdf"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    DOC = "application/msword"
    TXT = "text/plain"

    @property
    def mime_type(self) -> str:
        return self.value

    @classmethod
    def from_mime_type(cls, mime_type: str) -> "DocumentFormat":
        """
        Resolve a declared MIME type.

        Raises:
            UnsupportedTypeError: If the type is not one of PDF, DOCX, DOC, TXT
        """
        try:
            return cls(mime_type)
        except ValueError:
            raise UnsupportedTypeError(mime_type) from None

    @classmethod
    def is_supported(cls, mime_type: str) -> bool:
        return mime_type in cls._value2member_map_


class ProcessingStage(Enum):
    """Checkpoints a single file passes through, with their progress percentage."""

    STARTED = (10, "Analyzing document content")
    EXTRACTING = (25, "Extracting text content...")
    ANALYZING = (50, "Running AI analysis...")
    ASSEMBLING = (75, "Processing insights...")

    @property
    def progress(self) -> int:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]
