"""
Document utility functions for naming, counting and previewing text.
"""
import math
from pathlib import PurePath


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens ("one two   three" -> 3)."""
    if not text:
        return 0
    return len(text.split())


def estimate_page_count(word_count: int, words_per_page: int = 250) -> int:
    """Rough page estimate: words_per_page words per page, rounded up."""
    if word_count <= 0:
        return 0
    return math.ceil(word_count / words_per_page)


def build_storage_filename(file_id: str, original_name: str) -> str:
    """
    Derive the temp storage name for an upload, keeping the original extension.

    Example:
        build_storage_filename("abc", "report.final.pdf") -> "abc.pdf"
    """
    return f"{file_id}{PurePath(original_name or '').suffix}"


def text_preview(text: str, length: int = 1000) -> str:
    return text[:length] if text else ""


def format_size_limit(max_bytes: int) -> str:
    """Human-readable size limit used in upload rejections (10485760 -> "10MB")."""
    megabytes = max_bytes / (1024 * 1024)
    if megabytes.is_integer():
        return f"{int(megabytes)}MB"
    return f"{megabytes:.1f}MB"
