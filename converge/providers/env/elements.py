"""
Listas delimitadas (PATH y similares): comparación, unión y borrado de elementos.

Funciones puras: reciben cadenas y devuelven cadenas nuevas. El orden de los
elementos importa y una unión nunca introduce duplicados.
"""

from enum import Enum
from typing import Iterable, List, Optional, Tuple


class ElementDeletion(str, Enum):
    NO_DELIMITER = "no_delimiter"  # sin separador no se sabe qué sub-elementos borrar
    EXHAUSTED = "exhausted"        # no queda nada: hay que borrar la variable entera
    PARTIAL = "partial"            # se borró algo y queda valor
    NONE_FOUND = "none_found"      # nada que borrar

    @property
    def requires_full_delete(self) -> bool:
        return self in (ElementDeletion.NO_DELIMITER, ElementDeletion.EXHAUSTED)


def split_elements(value: Optional[str], delim: str) -> List[str]:
    """Divide por el separador descartando segmentos vacíos."""
    if not value:
        return []
    return [e for e in value.split(delim) if e]


def unique(items: Iterable[str]) -> List[str]:
    """Quita duplicados conservando la primera aparición."""
    return list(dict.fromkeys(items))


def requires_modify_or_create(current: Optional[str], desired: Optional[str], delim: Optional[str]) -> bool:
    """
    Sin separador: True si el valor difiere (None nunca es igual).
    Con separador: False solo si los elementos deseados aparecen en el actual
    en el mismo orden relativo, aunque haya otros intercalados.
    """
    if not delim:
        return current is None or current != desired
    if current is None:
        return True
    wanted = unique(split_elements(desired, delim))
    wanted_set = set(wanted)
    found_in_order = [e for e in unique(split_elements(current, delim)) if e in wanted_set]
    return found_in_order != wanted


def merge_elements(current: Optional[str], desired: Optional[str], delim: str) -> str:
    """Primero los deseados (en su orden), después los actuales que no estaban."""
    merged = unique(split_elements(desired, delim) + split_elements(current, delim))
    return delim.join(merged)


def remove_elements(
    current: Optional[str], desired: Optional[str], delim: Optional[str]
) -> Tuple[ElementDeletion, Optional[str]]:
    """
    Quita de current todo elemento presente en desired.
    Devuelve el resultado y el valor restante (None si no aplica o se agotó).
    """
    if not delim:
        return ElementDeletion.NO_DELIMITER, None
    doomed = set(split_elements(desired, delim))
    existing = split_elements(current, delim)
    remaining = [e for e in existing if e not in doomed]
    if not remaining:
        return ElementDeletion.EXHAUSTED, None
    if len(remaining) == len(existing):
        return ElementDeletion.NONE_FOUND, current
    return ElementDeletion.PARTIAL, delim.join(remaining)
