"""Comparison file storage: binary codec, versioned schemas and results."""

from pathcomp.storage.compfile import (
    CURRENT_FILE_VERSION,
    FILE_EXTENSION,
    CompFile,
    OldPath,
    OldPathCollection,
    encode_v04,
)
from pathcomp.storage.errors import CompFileError, DecodeError, FileIOError
from pathcomp.storage.models import FileOpResult, FileStatus, RetryPolicy

__all__ = [
    "CompFile",
    "OldPath",
    "OldPathCollection",
    "encode_v04",
    "CURRENT_FILE_VERSION",
    "FILE_EXTENSION",
    "CompFileError",
    "DecodeError",
    "FileIOError",
    "FileOpResult",
    "FileStatus",
    "RetryPolicy",
]
