import pytest

from docanalyzer.api.exceptions import ExtractionError, UnsupportedTypeError
from docanalyzer.domain.value_objects import DocumentFormat
from docanalyzer.services.text_extractors import (
    DOCExtractor,
    DOCXExtractor,
    PDFExtractor,
    TextExtractor,
    TextExtractorFactory,
)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class TestDocumentFormat:
    @pytest.mark.parametrize("mime", ["application/pdf", DOCX_MIME, "application/msword", "text/plain"])
    def test_accepted_types(self, mime) -> None:
        assert DocumentFormat.is_supported(mime)
        assert DocumentFormat.from_mime_type(mime).mime_type == mime

    @pytest.mark.parametrize("mime", ["image/png", "application/rtf", "", "text/csv"])
    def test_other_types_are_rejected(self, mime) -> None:
        assert not DocumentFormat.is_supported(mime)
        with pytest.raises(UnsupportedTypeError, match="Unsupported file type"):
            DocumentFormat.from_mime_type(mime)


class TestTextExtractorFactory:
    def test_registers_one_extractor_per_format(self) -> None:
        assert isinstance(TextExtractorFactory.get_extractor(DocumentFormat.PDF), PDFExtractor)
        assert isinstance(TextExtractorFactory.get_extractor(DocumentFormat.DOCX), DOCXExtractor)
        assert isinstance(TextExtractorFactory.get_extractor(DocumentFormat.DOC), DOCExtractor)
        assert isinstance(TextExtractorFactory.get_extractor(DocumentFormat.TXT), TextExtractor)

    def test_plain_text_is_decoded_as_utf8(self) -> None:
        text = TextExtractorFactory.extract_text("Grüße aus Köln".encode("utf-8"), "text/plain")
        assert text == "Grüße aus Köln"

    def test_pdf_text(self, sample_pdf_bytes) -> None:
        text = TextExtractorFactory.extract_text(sample_pdf_bytes, "application/pdf")
        assert "Hello PDF World" in text

    def test_pdf_pages_are_joined_with_newline(self, multi_page_pdf_bytes) -> None:
        text = TextExtractorFactory.extract_text(multi_page_pdf_bytes, "application/pdf")
        assert text.splitlines() == ["Page one content", "Page two content"]

    def test_blank_pdf_gives_empty_text(self, empty_pdf_bytes) -> None:
        assert TextExtractorFactory.extract_text(empty_pdf_bytes, "application/pdf") == ""

    def test_docx_paragraphs_then_table_rows(self, sample_docx_bytes) -> None:
        text = TextExtractorFactory.extract_text(sample_docx_bytes, DOCX_MIME)
        lines = text.splitlines()
        assert lines[0] == "First paragraph"
        assert lines[1] == "Second paragraph"
        assert lines[-1] == "Name | Value"

    def test_msword_declared_docx_uses_docx_reader(self, sample_docx_bytes) -> None:
        text = TextExtractorFactory.extract_text(sample_docx_bytes, "application/msword")
        assert "First paragraph" in text

    def test_unsupported_type(self) -> None:
        with pytest.raises(UnsupportedTypeError, match="Unsupported file type: image/png"):
            TextExtractorFactory.extract_text(b"\x89PNG", "image/png")

    def test_corrupt_pdf_is_generic_extraction_error(self) -> None:
        with pytest.raises(ExtractionError, match="Failed to extract text from document"):
            TextExtractorFactory.extract_text(b"this is not a pdf", "application/pdf")

    def test_corrupt_docx_is_generic_extraction_error(self) -> None:
        with pytest.raises(ExtractionError, match="Failed to extract text from document"):
            TextExtractorFactory.extract_text(b"not a zip archive", DOCX_MIME)


class TestMissingLibrary:
    def test_error_names_the_library(self) -> None:
        extractor = DOCXExtractor()
        extractor._available = False
        with pytest.raises(ExtractionError, match="python-docx"):
            extractor.extract(b"PK\x03\x04")

    def test_doc_message_suggests_conversion(self) -> None:
        message = DOCExtractor().get_error_message()
        assert "textract" in message
        assert "DOCX" in message
