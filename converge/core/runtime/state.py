"""
Estado de recursos: par deseado/actual y diferencias.

El core NO lee el sistema real; eso lo hacen los providers. Aquí solo se definen
las estructuras.
"""

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel


SpecT = TypeVar("SpecT", bound=BaseModel)


class StateDiff:
    """Diferencia entre estado deseado y real (agnóstico de provider)."""
    def __init__(
        self,
        resource_id: str,
        field: str,
        desired: Any,
        actual: Any,
        severity: str = "warning"
    ):
        self.resource_id = resource_id
        self.field = field
        self.desired = desired
        self.actual = actual
        self.severity = severity  # "error", "warning", "info"

    def __repr__(self) -> str:
        return f"StateDiff({self.resource_id}.{self.field}: {self.actual!r} -> {self.desired!r})"


class ResourceState(Generic[SpecT]):
    """
    Par deseado/actual de una entidad gestionada durante una ejecución.

    - desired: modelo con los atributos declarados; un campo en None no se gestiona.
    - current: modelo observado. Un campo fuera de model_fields_set nunca se sondeó;
      un campo sondeado con valor None significa "todavía no existe".
    - updated: arranca en False y pasa a True la primera vez que se cambia el sistema.
    """

    def __init__(self, identity: str, desired: SpecT, current: Optional[SpecT] = None):
        self.identity = identity
        self.desired = desired
        self.current = current
        self._updated = False

    @property
    def updated(self) -> bool:
        return self._updated

    def mark_updated(self) -> None:
        self._updated = True

    def managed_fields(self) -> List[str]:
        """Atributos declarados (con valor) en el estado deseado, en orden de declaración del modelo."""
        return [
            name for name in type(self.desired).model_fields
            if getattr(self.desired, name) is not None
        ]

    def probed(self, field: str) -> bool:
        """True si el atributo se sondeó en el estado actual (aunque valga None)."""
        return self.current is not None and field in self.current.model_fields_set

    def current_value(self, field: str) -> Any:
        if not self.probed(field):
            return None
        return getattr(self.current, field)

    def __repr__(self) -> str:
        return f"ResourceState({self.identity!r}, updated={self._updated})"

