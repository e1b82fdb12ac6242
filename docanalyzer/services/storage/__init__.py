"""
Temp storage module.

Uploaded files live in temp storage between receipt and processing.
Only the local filesystem adapter ships today; new backends implement
FileStorageInterface.
"""
from .base import FileStorageInterface
from .local_storage import LocalFileStorage

__all__ = [
    "FileStorageInterface",
    "LocalFileStorage",
]
