"""
Persistencia de variables de entorno.

- DotenvFileBackend: almacén duradero (archivo KEY=VALUE, vía python-dotenv).
- ProcessEnvMirror: espejo en proceso (os.environ), actualizado en el mismo camino síncrono.
"""

import os
import re
from pathlib import Path
from typing import Dict, MutableMapping, Optional, Protocol

from dotenv import dotenv_values, set_key, unset_key


_PLACEHOLDER = re.compile(r"%([^%]+)%")


class EnvBackend(Protocol):
    """Protocolo: persistencia duradera de variables, distinta del espejo en proceso."""
    def exists(self, name: str) -> bool:
        ...

    def get(self, name: str) -> Optional[str]:
        ...

    def set(self, name: str, value: str) -> None:
        ...

    def delete(self, name: str) -> None:
        ...

    def expand_path(self, value: str) -> str:
        ...


def expand_placeholders(value: str, lookup: MutableMapping[str, str]) -> str:
    """
    Sustituye %NOMBRE% por su valor (sin distinguir mayúsculas).
    Los marcadores desconocidos se dejan tal cual.
    """
    folded = {k.casefold(): v for k, v in lookup.items()}

    def _sub(match: "re.Match[str]") -> str:
        return folded.get(match.group(1).casefold(), match.group(0))

    return _PLACEHOLDER.sub(_sub, value)


class DotenvFileBackend:
    """Variables persistidas en un archivo de entorno (formato .env)."""

    def __init__(self, path: Path, lookup: Optional[MutableMapping[str, str]] = None):
        self.path = Path(path)
        self.lookup = lookup if lookup is not None else os.environ

    def _values(self) -> Dict[str, Optional[str]]:
        if not self.path.exists():
            return {}
        # Los valores se guardan literales: sin expandir ${VAR}
        return dict(dotenv_values(self.path, interpolate=False))

    def exists(self, name: str) -> bool:
        return name in self._values()

    def get(self, name: str) -> Optional[str]:
        value = self._values().get(name)
        if value is None and self.exists(name):
            return ""
        return value

    def set(self, name: str, value: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)
        set_key(self.path, name, value, quote_mode="always")

    def delete(self, name: str) -> None:
        if self.exists(name):
            unset_key(self.path, name)

    def expand_path(self, value: str) -> str:
        return expand_placeholders(value, self.lookup)


class ProcessEnvMirror:
    """Espejo en proceso. Siempre se escribe después del almacén duradero."""

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        self.environ = environ if environ is not None else os.environ

    def set(self, name: str, value: str) -> None:
        self.environ[name] = value

    def delete(self, name: str) -> None:
        self.environ.pop(name, None)
