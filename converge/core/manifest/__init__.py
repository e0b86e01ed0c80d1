"""
Manifest: modelos del estado deseado, carga y planificación.

Lógica pura; sin dependencias de CLI o providers.
"""

from converge.core.manifest.models import (
    CacheControlRecord,
    EnvAction,
    EnvResource,
    EnvSpec,
    FileAccessSpec,
    FileResource,
    Manifest,
    RemoteFileCacheResource,
)
from converge.core.manifest.loader import load_manifest, parse_manifest
from converge.core.manifest.planner import plan_from_diffs, merge_diffs

__all__ = [
    "CacheControlRecord",
    "EnvAction",
    "EnvResource",
    "EnvSpec",
    "FileAccessSpec",
    "FileResource",
    "Manifest",
    "RemoteFileCacheResource",
    "load_manifest",
    "parse_manifest",
    "plan_from_diffs",
    "merge_diffs",
]
