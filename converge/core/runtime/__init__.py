"""
Runtime: resolución de rutas de estado y contratos de estado.

El estado real NUNCA vive dentro del repo; se escribe en /var/lib/converge/.
"""

from converge.core.runtime.resolver import state_root, file_cache_root, env_store_path
from converge.core.runtime.state import ResourceState, StateDiff

__all__ = ["state_root", "file_cache_root", "env_store_path", "ResourceState", "StateDiff"]
