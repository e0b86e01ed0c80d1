"""
Resolución de rutas de estado.

- state_root(): directorio canónico de estado/runtime (/var/lib/converge/).
- file_cache_root(): raíz del blob store (FileCache) dentro de state_root().
- env_store_path(): archivo donde se persisten las variables de entorno gestionadas.

El core NO escribe en disco; solo expone estas rutas. Quién escribe (CLI/providers)
debe usar estas funciones en vez de construir rutas a mano.
"""

import os
from pathlib import Path
from typing import Optional


# Ruta canónica del estado (fuera del repo)
CONVERGE_STATE_ROOT = Path("/var/lib/converge")


def _env_path(name: str) -> Optional[Path]:
    explicit = os.environ.get(name, "").strip()
    if explicit:
        return Path(explicit).expanduser().resolve()
    return None


def state_root() -> Path:
    """
    Directorio raíz del estado de converge.
    CONVERGE_STATE_ROOT tiene prioridad; si no, /var/lib/converge/.
    """
    return _env_path("CONVERGE_STATE_ROOT") or CONVERGE_STATE_ROOT


def file_cache_root() -> Path:
    """Raíz del FileCache (remote_file/<basename>.json vive debajo)."""
    return state_root() / "cache"


def env_store_path() -> Path:
    """
    Archivo de variables de entorno persistidas.
    Resolución: CONVERGE_ENV_FILE → <state_root>/environment.
    """
    return _env_path("CONVERGE_ENV_FILE") or state_root() / "environment"
