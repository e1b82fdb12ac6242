import pytest

from docanalyzer.utils.pdf_parser import (
    PDFOptions,
    PDFParseError,
    TextRun,
    assemble_page_text,
    parse_pdf_content,
)


class TestAssemblePageText:
    def test_stream_order_joins_runs_with_single_spaces(self) -> None:
        runs = [TextRun("Hello", 72, 700), TextRun("  world ", 120, 700)]
        assert assemble_page_text(runs) == "Hello world"

    def test_runs_are_percent_decoded(self) -> None:
        runs = [TextRun("caf%C3%A9", 72, 700), TextRun("100%", 120, 700)]
        assert assemble_page_text(runs) == "café 100%"

    def test_layout_orders_top_to_bottom_then_left_to_right(self) -> None:
        runs = [
            TextRun("second", 72, 680),
            TextRun("right", 200, 700),
            TextRun("left", 72, 700.5),
        ]
        text = assemble_page_text(runs, preserve_layout=True, preserve_whitespace=True)
        assert [line.strip() for line in text.splitlines()] == ["left right", "second"]

    def test_small_vertical_jitter_stays_on_one_line(self) -> None:
        runs = [TextRun("a", 72, 700), TextRun("b", 90, 704)]
        text = assemble_page_text(runs, preserve_layout=True, preserve_whitespace=True)
        assert "\n" not in text

    def test_layout_newlines_collapse_without_preserve_whitespace(self) -> None:
        runs = [TextRun("top", 72, 700), TextRun("bottom", 72, 600)]
        assert assemble_page_text(runs, preserve_layout=True) == "top bottom"


class TestParsePdfContent:
    def test_page_number_headers(self, multi_page_pdf_bytes) -> None:
        text = parse_pdf_content(multi_page_pdf_bytes, PDFOptions(include_page_numbers=True))
        assert text.startswith("--- Page 1 ---\nPage one content")
        assert "--- Page 2 ---\nPage two content" in text

    def test_custom_page_separator(self, multi_page_pdf_bytes) -> None:
        text = parse_pdf_content(multi_page_pdf_bytes, PDFOptions(page_break_separator="\n\n"))
        assert text == "Page one content\n\nPage two content"

    def test_max_pages(self, multi_page_pdf_bytes) -> None:
        text = parse_pdf_content(multi_page_pdf_bytes, PDFOptions(max_pages=1))
        assert text == "Page one content"

    def test_reads_from_path(self, tmp_path, sample_pdf_bytes) -> None:
        pdf_path = tmp_path / "sample.pdf"
        pdf_path.write_bytes(sample_pdf_bytes)
        assert parse_pdf_content(str(pdf_path)) == "Hello PDF World"

    def test_invalid_source_type(self) -> None:
        with pytest.raises(PDFParseError):
            parse_pdf_content(12345)

    def test_garbage_bytes(self) -> None:
        with pytest.raises(PDFParseError):
            parse_pdf_content(b"not a pdf at all")
