"""Comparison file error taxonomy."""

from __future__ import annotations


class CompFileError(Exception):
    """Base error for comparison file reading and writing."""


class FileIOError(CompFileError):
    """File could not be read or written."""

    def __init__(self, path: str, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read/write file {path!r}: {cause}")


class DecodeError(CompFileError):
    """Bytes do not match any known comparison file schema."""
