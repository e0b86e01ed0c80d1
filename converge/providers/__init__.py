"""
Providers de convergencia: file, env y remote_file.

Implementan converge.core.infra.ConvergenceProvider.
"""

from converge.providers.env import DelimitedEnvMerger
from converge.providers.file_access import FileAccessController
from converge.providers.remote_file import CacheControlStore, FileCache
from converge.providers.registry import ProviderFactory

__all__ = [
    "CacheControlStore",
    "DelimitedEnvMerger",
    "FileAccessController",
    "FileCache",
    "ProviderFactory",
]
