"""
Planificación: convierte diffs en acciones legibles sin ejecutar.
"""

from typing import List

from converge.core.runtime.state import StateDiff


def plan_from_diffs(diffs: List[StateDiff]) -> List[str]:
    """
    Convierte una lista de StateDiff en acciones legibles (para mostrar en CLI).
    No ejecuta nada.
    """
    actions: List[str] = []
    for d in diffs:
        if d.actual is None:
            actions.append(f"Crear {d.resource_id}: {d.field} = {d.desired}")
        elif d.desired != d.actual:
            actions.append(f"Actualizar {d.resource_id}.{d.field}: {d.actual} → {d.desired}")
    return actions


def merge_diffs(diff_lists: List[List[StateDiff]]) -> List[StateDiff]:
    """Combina listas de diffs de varios providers y devuelve una sola lista."""
    out: List[StateDiff] = []
    seen: set = set()
    for lst in diff_lists:
        for d in lst:
            key = (d.resource_id, d.field)
            if key not in seen:
                seen.add(key)
                out.append(d)
    return out
