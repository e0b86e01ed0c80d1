"""
FileCache: almacén clave-valor sobre el sistema de archivos.

Las claves son rutas relativas (ej: remote_file/<basename>.json) bajo una raíz fija.
"""

from pathlib import Path
from typing import Optional, Union

from converge.core.errors import ConfigError
from converge.core.runtime.resolver import file_cache_root


class FileCache:
    """Blob store: exists/load/store/delete por clave."""

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else file_cache_root()

    def _path_for(self, key: str) -> Path:
        rel = Path(key)
        if rel.is_absolute() or ".." in rel.parts or not rel.parts:
            raise ConfigError(f"Clave de cache inválida: {key!r}")
        return self.root / rel

    def exists(self, key: str) -> bool:
        return self._path_for(key).is_file()

    def load(self, key: str) -> bytes:
        """Bytes tal cual están en disco. Lanza FileNotFoundError si la clave no existe."""
        return self._path_for(key).read_bytes()

    def store(self, key: str, data: Union[str, bytes]) -> None:
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            data = data.encode("utf-8")
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_bytes(data)
        tmp.replace(path)

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        if path.exists():
            path.unlink()
