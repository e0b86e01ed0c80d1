"""
Contratos que deben implementar los providers de convergencia.

El core solo define interfaces; la implementación vive en converge/providers/*.
"""

from typing import List, Optional, Protocol, runtime_checkable

from converge.core.errors import ConvergeError
from converge.core.runtime.state import ResourceState, StateDiff


class PlanResult:
    """Resultado de un plan (qué se aplicaría) sin ejecutar."""
    def __init__(
        self,
        actions: List[str],
        diffs: List[StateDiff],
        summary: str = "",
        errors: Optional[List[ConvergeError]] = None,
    ):
        self.actions = actions
        self.diffs = diffs
        self.summary = summary
        self.errors = errors or []

    @property
    def changed(self) -> bool:
        return bool(self.actions)


@runtime_checkable
class ConvergenceProvider(Protocol):
    """
    Contrato mínimo de un provider (file, env, remote_file).

    Dos fases: validate() recolecta problemas sin efectos secundarios;
    apply() asume que la validación ya pasó.
    """
    state: ResourceState

    @property
    def name(self) -> str:
        """Identificador del provider (ej: file, env)."""
        ...

    def load_current_state(self) -> ResourceState:
        """Sondea solo los atributos declarados en el estado deseado."""
        ...

    def validate(self) -> List[ConvergeError]:
        """Devuelve todos los problemas encontrados; lista vacía si es válido."""
        ...

    def needs_update(self) -> bool:
        """True si algún atributo declarado difiere del actual."""
        ...

    def describe_changes(self) -> List[str]:
        """Cambios legibles en orden fijo de atributos."""
        ...

    def apply(self) -> bool:
        """Aplica solo los atributos distintos. Devuelve True si hubo cambios."""
        ...
