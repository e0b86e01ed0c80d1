"""
Provider file: owner, group y mode de archivos.
"""

from converge.providers.file_access.backend import FileStat, OsFileBackend
from converge.providers.file_access.controller import (
    FileAccessController,
    target_identifier,
    target_mode,
)
from converge.providers.file_access.identity import (
    IdentityResolver,
    PosixIdentityLookup,
    normalize_identifier,
)

__all__ = [
    "FileAccessController",
    "FileStat",
    "IdentityResolver",
    "OsFileBackend",
    "PosixIdentityLookup",
    "normalize_identifier",
    "target_identifier",
    "target_mode",
]
