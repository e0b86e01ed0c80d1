"""
DelimitedEnvMerger: convergencia de variables de entorno con valores tipo lista.

Máquina de estados por acción (create, modify, delete). Cada cambio se escribe
primero en el almacén duradero y después en el espejo en proceso, en el mismo
camino síncrono.
"""

import re
from typing import Callable, Dict, List, Optional

from rich.console import Console

from converge.core.errors import ConvergeError, VariableNotFound
from converge.core.infra.base import BaseProvider
from converge.core.manifest.models import EnvAction, EnvSpec
from converge.core.runtime.resolver import env_store_path
from converge.core.runtime.state import ResourceState, StateDiff
from converge.providers.env.backend import DotenvFileBackend, EnvBackend, ProcessEnvMirror
from converge.providers.env.elements import (
    ElementDeletion,
    merge_elements,
    remove_elements,
    requires_modify_or_create,
)


SEARCH_PATH_VARIABLE = "PATH"
SYSTEM_ROOT_PLACEHOLDER = "%SystemRoot%"
_SYSTEM_ROOT_RE = re.compile(re.escape(SYSTEM_ROOT_PLACEHOLDER), re.IGNORECASE)


class DelimitedEnvMerger(BaseProvider):
    """Provider de variables de entorno (PATH y similares)."""

    name = "env"

    def __init__(
        self,
        state: ResourceState[EnvSpec],
        action: EnvAction = EnvAction.CREATE,
        delim: Optional[str] = None,
        backend: Optional[EnvBackend] = None,
        mirror: Optional[ProcessEnvMirror] = None,
        console: Optional[Console] = None,
    ):
        super().__init__(state, console)
        self.action = EnvAction(action)
        self.delim = delim or None
        self.backend = backend or DotenvFileBackend(env_store_path())
        self.mirror = mirror or ProcessEnvMirror()
        self.key_exists = False
        self.new_value: Optional[str] = None

    @property
    def key_name(self) -> str:
        return self.state.identity

    @property
    def is_search_path(self) -> bool:
        return self.key_name.casefold() == SEARCH_PATH_VARIABLE.casefold()

    # --- estado ---

    def load_current_state(self) -> ResourceState:
        self.key_exists = self.backend.exists(self.key_name)
        value = self.backend.get(self.key_name) if self.key_exists else None
        self.state.current = EnvSpec(value=value)
        return self.state

    @property
    def current_value(self) -> Optional[str]:
        return self.state.current_value("value")

    @property
    def desired_value(self) -> Optional[str]:
        """Valor declarado; en PATH, con %SystemRoot% ya expandido. No toca state.desired."""
        value = self.state.desired.value
        if value is None or not self.is_search_path:
            return value
        if not _SYSTEM_ROOT_RE.search(value):
            return value
        system_root = self.backend.expand_path(SYSTEM_ROOT_PLACEHOLDER)
        return _SYSTEM_ROOT_RE.sub(lambda _: system_root, value)

    def requires_modify_or_create(self) -> bool:
        return requires_modify_or_create(self.current_value, self.desired_value, self.delim)

    # --- contrato ---

    def validate(self) -> List[ConvergeError]:
        self.requirements.clear()
        if self.action is EnvAction.MODIFY and self.state.current is not None and not self.key_exists:
            self.requirements.defer(
                VariableNotFound(self.key_name),
                whyrun=f"Assuming env[{self.key_name}] would have been created",
            )
        return self.requirements.errors

    def needs_update(self) -> bool:
        if self.action is EnvAction.CREATE:
            return not self.key_exists or self.requires_modify_or_create()
        if self.action is EnvAction.MODIFY:
            return self.key_exists and self.requires_modify_or_create()
        if not self.key_exists:
            return False
        result, _ = remove_elements(self.current_value, self.desired_value, self.delim)
        return result is not ElementDeletion.NONE_FOUND

    def describe_changes(self) -> List[str]:
        if not self.needs_update():
            return []
        current = self.current_value
        if self.action is EnvAction.DELETE:
            result, remaining = remove_elements(current, self.desired_value, self.delim)
            if result.requires_full_delete:
                return [f"delete env[{self.key_name}]"]
            return [f"change value from '{current}' to '{remaining}'"]
        if not self.key_exists:
            return [f"create env[{self.key_name}] with value '{self.desired_value}'"]
        return [f"change value from '{current}' to '{self._modified_value()}'"]

    def detect_drift(self) -> List[StateDiff]:
        if not self.needs_update():
            return []
        if self.action is EnvAction.DELETE:
            return [self._diff("value", None, self.current_value)]
        return [self._diff("value", self._modified_value(), self.current_value)]

    def apply(self) -> bool:
        actions: Dict[EnvAction, Callable[[], bool]] = {
            EnvAction.CREATE: self.action_create,
            EnvAction.MODIFY: self.action_modify,
            EnvAction.DELETE: self.action_delete,
        }
        return actions[self.action]()

    # --- acciones ---

    def action_create(self) -> bool:
        if not self.key_exists:
            self.create_env(self.desired_value or "")
            self._say(f"[green]✔ env[{self.key_name}] creada[/green]")
            self.state.mark_updated()
            return True
        if self.requires_modify_or_create():
            self.modify_env()
            self._say(f"[green]✔ env[{self.key_name}] modificada[/green]")
            self.state.mark_updated()
            return True
        return False

    def action_modify(self) -> bool:
        if not self.key_exists:
            raise VariableNotFound(self.key_name)
        if self.requires_modify_or_create():
            self.modify_env()
            self._say(f"[green]✔ env[{self.key_name}] modificada[/green]")
            self.state.mark_updated()
            return True
        return False

    def action_delete(self) -> bool:
        if not self.key_exists:
            return False
        if self.delete_element().requires_full_delete:
            self.delete_env()
            self._say(f"[green]✔ env[{self.key_name}] eliminada[/green]")
            self.state.mark_updated()
            return True
        return self.state.updated

    def delete_element(self) -> ElementDeletion:
        """
        Quita los elementos declarados del valor actual.
        PARTIAL reescribe la variable; EXHAUSTED lo resuelve action_delete borrándola.
        """
        result, remaining = remove_elements(self.current_value, self.desired_value, self.delim)
        if result is ElementDeletion.PARTIAL:
            self.create_env(remaining)
            self._say(f"[dim]env[{self.key_name}]: elementos eliminados[/dim]")
            self.state.mark_updated()
        return result

    def _modified_value(self) -> str:
        if self.delim:
            return merge_elements(self.current_value, self.desired_value, self.delim)
        return self.desired_value or ""

    def modify_env(self) -> None:
        self.create_env(self._modified_value())

    # --- persistencia ---

    def create_env(self, value: str) -> None:
        """Almacén duradero primero, espejo después."""
        self.backend.set(self.key_name, value)
        self.mirror.set(self.key_name, value)
        self.new_value = value
        self.key_exists = True
        self.state.current = EnvSpec(value=value)

    def delete_env(self) -> None:
        self.backend.delete(self.key_name)
        self.mirror.delete(self.key_name)
        self.new_value = None
        self.key_exists = False
        self.state.current = EnvSpec(value=None)
