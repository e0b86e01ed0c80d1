"""
Provider remote_file: cache de validadores HTTP y blob store.
"""

from converge.providers.remote_file.cache_control import (
    CacheControlStore,
    legacy_cache_key,
    sanitize_uri,
    sanitized_cache_key,
)
from converge.providers.remote_file.file_cache import FileCache

__all__ = [
    "CacheControlStore",
    "FileCache",
    "legacy_cache_key",
    "sanitize_uri",
    "sanitized_cache_key",
]
