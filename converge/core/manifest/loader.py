"""
Carga del manifiesto de recursos (YAML → modelos).
"""

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from converge.core.errors import ConfigError, InvalidSpecification
from converge.core.manifest.models import Manifest


def _format_errors(exc: PydanticValidationError) -> List[str]:
    out: List[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        out.append(f"{loc}: {err.get('msg')}")
    return out


def parse_manifest(data: Union[Dict[str, Any], List[Any], None], source: str = "<manifest>") -> Manifest:
    """
    Valida un diccionario ya cargado.
    Acepta también una lista de recursos sin envoltorio.
    """
    if data is None:
        data = {}
    if isinstance(data, list):
        data = {"resources": data}
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: el manifiesto debe ser un diccionario o una lista de recursos")
    try:
        return Manifest.model_validate(data)
    except PydanticValidationError as e:
        raise InvalidSpecification(f"{source}: " + "; ".join(_format_errors(e))) from e


def load_manifest(path: Path) -> Manifest:
    """Carga y valida un manifiesto YAML."""
    if not path.exists():
        raise ConfigError(f"No existe el manifiesto: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: YAML inválido ({e})") from e
    return parse_manifest(data, source=str(path))
