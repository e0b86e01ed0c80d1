"""
Acceso al sistema de archivos: stat, chown y chmod.

Un método por llamada al SO; quien llama decide cuándo invocarlas.
"""

import os
from pathlib import Path
from typing import Optional, Protocol, Union


class FileStat:
    """Metadatos observados de un archivo."""
    def __init__(self, uid: int, gid: int, mode: int):
        self.uid = uid
        self.gid = gid
        self.mode = mode  # solo bits de permiso (& 0o7777)

    def __repr__(self) -> str:
        return f"FileStat(uid={self.uid}, gid={self.gid}, mode=0{self.mode:o})"


class FileBackend(Protocol):
    def stat(self, path: str) -> Optional[FileStat]:
        ...

    def chown(self, uid: Optional[int], gid: Optional[int], path: str) -> None:
        ...

    def chmod(self, mode: int, path: str) -> None:
        ...


class OsFileBackend:
    """Implementación real sobre os.*; los errores del SO se propagan sin tocar."""

    def stat(self, path: Union[str, Path]) -> Optional[FileStat]:
        """Devuelve None si el archivo no existe."""
        try:
            st = os.stat(path)
        except FileNotFoundError:
            return None
        return FileStat(st.st_uid, st.st_gid, st.st_mode & 0o7777)

    def chown(self, uid: Optional[int], gid: Optional[int], path: Union[str, Path]) -> None:
        # -1 deja ese lado sin cambios
        os.chown(path, -1 if uid is None else uid, -1 if gid is None else gid)

    def chmod(self, mode: int, path: Union[str, Path]) -> None:
        os.chmod(path, mode)
