"""
FileAccessController: convergencia de owner, group y mode de un archivo.

Cada atributo se compara y se aplica por separado (un chown/chmod por atributo
distinto): nunca una llamada en bloque que reescriba lo que ya estaba bien.
"""

from typing import Any, Dict, List, Optional

from rich.console import Console

from converge.core.errors import ConvergeError, IdentityNotFound, InvalidSpecification
from converge.core.infra.base import BaseProvider
from converge.core.manifest.models import FileAccessSpec
from converge.core.runtime.state import ResourceState, StateDiff
from converge.providers.file_access.backend import FileBackend, OsFileBackend
from converge.providers.file_access.identity import IdentityResolver, normalize_identifier


_KIND_BY_ATTRIBUTE = {"owner": "user", "group": "group"}


def target_identifier(kind: str, spec: Any, resolver: IdentityResolver) -> Optional[int]:
    """
    uid/gid objetivo para un owner/group declarado.

    - None → None (atributo no gestionado)
    - int → el mismo valor, normalizado
    - str → resuelto por nombre (IdentityNotFound si no existe)
    - cualquier otro tipo → InvalidSpecification
    """
    if spec is None:
        return None
    if isinstance(spec, bool) or not isinstance(spec, (int, str)):
        raise InvalidSpecification(
            f"cannot resolve {spec!r} to {'uid' if kind == 'user' else 'gid'}, "
            f"{'owner' if kind == 'user' else 'group'} must be a string or integer"
        )
    if isinstance(spec, int):
        return normalize_identifier(spec)
    return resolver.resolve(kind, spec)


def target_mode(spec: Any) -> Optional[int]:
    """Cadena → octal ("444" == 0o444); entero → tal cual; None → None."""
    if spec is None:
        return None
    if isinstance(spec, bool):
        raise InvalidSpecification(f"invalid mode {spec!r}")
    if isinstance(spec, int):
        return spec & 0o7777
    if isinstance(spec, str):
        try:
            return int(spec, 8) & 0o7777
        except ValueError:
            raise InvalidSpecification(f"mode '{spec}' is not a valid octal string") from None
    raise InvalidSpecification(f"mode must be a string or integer, got {spec!r}")


def mode_to_s(mode: Optional[int]) -> str:
    return "" if mode is None else f"0{mode:o}"


class FileAccessController(BaseProvider):
    """Provider de permisos y propiedad de archivos."""

    name = "file"

    def __init__(
        self,
        state: ResourceState[FileAccessSpec],
        resolver: Optional[IdentityResolver] = None,
        backend: Optional[FileBackend] = None,
        console: Optional[Console] = None,
    ):
        super().__init__(state, console)
        self.resolver = resolver or IdentityResolver()
        self.backend = backend or OsFileBackend()

    @property
    def path(self) -> str:
        return self.state.identity

    # --- estado actual ---

    def load_current_state(self) -> ResourceState:
        """stat del archivo; solo se sondean los atributos declarados."""
        st = self.backend.stat(self.path)
        observed: Dict[str, Any] = {}
        if st is not None:
            observed = {"owner": st.uid, "group": st.gid, "mode": st.mode}
        probed = {f: observed.get(f) for f in self.state.managed_fields()}
        self.state.current = FileAccessSpec(**probed)
        return self.state

    # --- objetivos ---

    def _target_identifier(self, attribute: str) -> Optional[int]:
        kind = _KIND_BY_ATTRIBUTE[attribute]
        spec = getattr(self.state.desired, attribute)
        try:
            return target_identifier(kind, spec, self.resolver)
        except IdentityNotFound as e:
            # Se lanza en la fase de requisitos, no aquí
            self.requirements.defer(e, whyrun=f"Assuming {kind} {spec} would have been created")
            return None

    def _current_identifier(self, attribute: str) -> Optional[int]:
        value = self.state.current_value(attribute)
        if value is None:
            return None
        try:
            return target_identifier(_KIND_BY_ATTRIBUTE[attribute], value, self.resolver)
        except IdentityNotFound:
            return None

    @property
    def target_uid(self) -> Optional[int]:
        return self._target_identifier("owner")

    @property
    def target_gid(self) -> Optional[int]:
        return self._target_identifier("group")

    @property
    def target_mode(self) -> Optional[int]:
        return target_mode(self.state.desired.mode)

    @property
    def current_uid(self) -> Optional[int]:
        return self._current_identifier("owner")

    @property
    def current_gid(self) -> Optional[int]:
        return self._current_identifier("group")

    @property
    def current_mode(self) -> Optional[int]:
        return target_mode(self.state.current_value("mode"))

    # --- decisiones ---

    def should_update_owner(self) -> bool:
        target = self.target_uid
        return target is not None and (self.current_uid is None or self.current_uid != target)

    def should_update_group(self) -> bool:
        target = self.target_gid
        return target is not None and (self.current_gid is None or self.current_gid != target)

    def should_update_mode(self) -> bool:
        target = self.target_mode
        return target is not None and (self.current_mode is None or self.current_mode != target)

    def needs_update(self) -> bool:
        return self.should_update_owner() or self.should_update_group() or self.should_update_mode()

    def validate(self) -> List[ConvergeError]:
        """Calcula todos los objetivos; los tipos inválidos se lanzan de inmediato."""
        self.requirements.clear()
        for attribute in ("owner", "group"):
            self._target_identifier(attribute)
        target_mode(self.state.desired.mode)
        return self.requirements.errors

    def describe_changes(self) -> List[str]:
        changes: List[str] = []
        current = self.state.current
        if self.should_update_owner():
            old = "" if current is None or current.owner is None else current.owner
            changes.append(f"change owner from '{old}' to '{self.state.desired.owner}'")
        if self.should_update_group():
            old = "" if current is None or current.group is None else current.group
            changes.append(f"change group from '{old}' to '{self.state.desired.group}'")
        if self.should_update_mode():
            changes.append(
                f"change mode from '{mode_to_s(self.current_mode)}' to '{mode_to_s(self.target_mode)}'"
            )
        return changes

    def detect_drift(self) -> List[StateDiff]:
        diffs: List[StateDiff] = []
        if self.should_update_owner():
            diffs.append(self._diff("owner", self.target_uid, self.current_uid))
        if self.should_update_group():
            diffs.append(self._diff("group", self.target_gid, self.current_gid))
        if self.should_update_mode():
            diffs.append(self._diff("mode", mode_to_s(self.target_mode), mode_to_s(self.current_mode) or None))
        return diffs

    # --- aplicación ---

    def set_owner(self) -> bool:
        if not self.should_update_owner():
            return False
        uid = self.target_uid
        self._say(f"[dim]{self.path}: owner → {uid}[/dim]")
        self.backend.chown(uid, None, self.path)
        self.state.mark_updated()
        return True

    def set_group(self) -> bool:
        if not self.should_update_group():
            return False
        gid = self.target_gid
        self._say(f"[dim]{self.path}: group → {gid}[/dim]")
        self.backend.chown(None, gid, self.path)
        self.state.mark_updated()
        return True

    def set_mode(self) -> bool:
        if not self.should_update_mode():
            return False
        mode = self.target_mode
        self._say(f"[dim]{self.path}: mode → {mode_to_s(mode)}[/dim]")
        self.backend.chmod(mode, self.path)
        self.state.mark_updated()
        return True

    def set_all(self) -> bool:
        """
        owner, group y mode, cada uno contra el estado recién observado:
        un chown puede limpiar bits setuid/setgid, así que mode se recalcula después.
        """
        changed = False
        for setter in (self.set_owner, self.set_group, self.set_mode):
            self.load_current_state()
            changed = setter() or changed
        return changed

    def apply(self) -> bool:
        return self.set_all()
