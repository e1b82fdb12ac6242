"""
Text splitting for analysis prompts.

Thin wrapper around langchain's RecursiveCharacterTextSplitter: chunks are at
most chunk_size characters, consecutive chunks share up to chunk_overlap
characters, and boundaries prefer paragraph breaks, then line breaks, then
spaces before falling back to a hard cut.
"""
from typing import List

from langchain_text_splitters import RecursiveCharacterTextSplitter


def validate_chunk_params(chunk_size: int, overlap: int) -> None:
    if chunk_size <= 0:
        raise ValueError("Chunk size must be greater than zero.")
    if overlap < 0:
        raise ValueError("Chunk overlap must be zero or greater.")
    if overlap >= chunk_size:
        raise ValueError("Chunk overlap must be smaller than the chunk size.")


def split_text(text: str, chunk_size: int = 4000, chunk_overlap: int = 200) -> List[str]:
    """
    Split text into overlapping chunks.

    Args:
        text: Text to split
        chunk_size: Maximum characters per chunk
        chunk_overlap: Characters repeated at the start of the next chunk

    Returns:
        List of whitespace-trimmed chunks (empty list for blank text)
    """
    validate_chunk_params(chunk_size, chunk_overlap)

    if not text or not text.strip():
        return []

    splitter = RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        length_function=len,
    )
    return splitter.split_text(text)
