"""
Core: lógica de convergencia pura.

ENFORCEMENT (arquitectura limpia):
- Este paquete NO debe importar: converge.cli ni converge.providers.* (implementaciones).
- Permitido: typing, pathlib.Path, pydantic, PyYAML, rich.console.Console (salida opcional),
  converge.core.* (errors, runtime, infra, manifest).
- Los providers y la CLI importan desde core; nunca al revés.
"""

from converge.core.errors import (
    ConvergeError,
    ValidationError,
    ConfigError,
    ProviderError,
    IdentityNotFound,
    InvalidSpecification,
    VariableNotFound,
)

__all__ = [
    "ConvergeError",
    "ValidationError",
    "ConfigError",
    "ProviderError",
    "IdentityNotFound",
    "InvalidSpecification",
    "VariableNotFound",
]
