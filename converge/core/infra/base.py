"""
Base para providers: implementación por defecto de plan, drift y converge.

Los providers heredan de aquí y completan load_current_state/needs_update/apply.
"""

from typing import Any, List, Optional

from rich.console import Console

from converge.core.errors import ConvergeError
from converge.core.infra.contracts import ConvergenceProvider, PlanResult
from converge.core.infra.requirements import Requirements
from converge.core.runtime.state import ResourceState, StateDiff


class BaseProvider(ConvergenceProvider):
    """Base de providers de convergencia."""

    name: str = "base"

    def __init__(self, state: ResourceState, console: Optional[Console] = None):
        self.state = state
        self.console = console
        self.requirements = Requirements()

    # --- contrato ---

    def load_current_state(self) -> ResourceState:
        """Por defecto: no sondea nada."""
        return self.state

    def validate(self) -> List[ConvergeError]:
        """Por defecto: devuelve lo recolectado en requirements."""
        return self.requirements.errors

    def needs_update(self) -> bool:
        return False

    def describe_changes(self) -> List[str]:
        return []

    def apply(self) -> bool:
        """Por defecto: no aplica nada."""
        return False

    # --- derivados ---

    def detect_drift(self) -> List[StateDiff]:
        """Por defecto: sin drift."""
        return []

    def plan(self) -> PlanResult:
        """Carga el estado actual y calcula qué se aplicaría, sin ejecutar."""
        if self.state.current is None:
            self.load_current_state()
        errors = self.validate()
        actions = self.describe_changes()
        summary = f"{self.name}[{self.state.identity}]: " + (
            f"{len(actions)} cambio(s)" if actions else "sin cambios"
        )
        return PlanResult(actions=actions, diffs=self.detect_drift(), summary=summary, errors=errors)

    def converge(self) -> bool:
        """
        load → validate → apply.

        Lanza el primer requisito incumplido antes de tocar el sistema.
        Devuelve el flag updated del recurso.
        """
        self.load_current_state()
        self.validate()
        self.requirements.run()
        self.apply()
        return self.state.updated

    def _say(self, message: str) -> None:
        if self.console:
            self.console.print(message)

    def _diff(self, field: str, desired: Any, actual: Any, severity: str = "warning") -> StateDiff:
        return StateDiff(self.state.identity, field, desired, actual, severity)
