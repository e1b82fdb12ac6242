"""
Utility functions - Pure functions with no service dependencies.
These can be used across all layers.
"""
from .document_utils import count_words, estimate_page_count, build_storage_filename
from .text_splitter import split_text
from .response_parser import parse_model_json

__all__ = [
    "count_words",
    "estimate_page_count",
    "build_storage_filename",
    "split_text",
    "parse_model_json",
]
