"""
Requisitos diferidos: se recolectan al calcular y se validan en una fase aparte.

Permite que un dry-run enumere todos los problemas antes de abortar; apply()
asume que run() ya pasó.
"""

from typing import List, Optional

from converge.core.errors import ConvergeError


class Requirement:
    """Un requisito incumplido: el error a lanzar y qué asumiría un dry-run."""
    def __init__(self, error: ConvergeError, whyrun: Optional[str] = None):
        self.error = error
        self.whyrun = whyrun

    def __repr__(self) -> str:
        return f"Requirement({self.error!r})"


class Requirements:
    """Colección de requisitos incumplidos de un recurso."""

    def __init__(self) -> None:
        self._failed: List[Requirement] = []

    def defer(self, error: ConvergeError, whyrun: Optional[str] = None) -> None:
        """Registra un fallo sin lanzarlo. El mismo mensaje no se registra dos veces."""
        if any(str(r.error) == str(error) for r in self._failed):
            return
        self._failed.append(Requirement(error, whyrun))

    @property
    def failed(self) -> List[Requirement]:
        return list(self._failed)

    @property
    def errors(self) -> List[ConvergeError]:
        return [r.error for r in self._failed]

    def ok(self) -> bool:
        return not self._failed

    def run(self) -> None:
        """Lanza el primer requisito incumplido, si lo hay."""
        if not self.ok():
            raise self._failed[0].error

    def clear(self) -> None:
        self._failed.clear()
