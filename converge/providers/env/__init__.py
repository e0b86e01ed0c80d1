"""
Provider env: variables de entorno con valores delimitados.
"""

from converge.providers.env.backend import (
    DotenvFileBackend,
    ProcessEnvMirror,
    expand_placeholders,
)
from converge.providers.env.elements import (
    ElementDeletion,
    merge_elements,
    remove_elements,
    requires_modify_or_create,
    split_elements,
)
from converge.providers.env.merger import DelimitedEnvMerger

__all__ = [
    "DelimitedEnvMerger",
    "DotenvFileBackend",
    "ElementDeletion",
    "ProcessEnvMirror",
    "expand_placeholders",
    "merge_elements",
    "remove_elements",
    "requires_modify_or_create",
    "split_elements",
]
