"""
Resolución de identidades: nombres de usuario/grupo → uid/gid numéricos.
"""

from typing import Optional, Protocol

from converge.core.errors import IdentityNotFound


# Algunas plataformas devuelven uids negativos ("nobody" = -2) como su complemento
# sin signo de 32 bits. Solo los últimos 9 valores bajo 2^32 se reinterpretan:
# los ids enormes que genera una sincronización con directorio son legítimos.
UNSIGNED_ID_SPACE = 2 ** 32
MAX_UNWRAPPED_ID = UNSIGNED_ID_SPACE - 10  # 4294967286


def normalize_identifier(value: int) -> int:
    """4294967294 → -2; 4294967286 se queda igual."""
    if MAX_UNWRAPPED_ID < value < UNSIGNED_ID_SPACE:
        return value - UNSIGNED_ID_SPACE
    return value


class IdentityLookup(Protocol):
    """Protocolo: consulta de identidades del sistema. Lanza KeyError si no existe."""
    def user_id(self, name: str) -> int:
        ...

    def group_id(self, name: str) -> int:
        ...


class PosixIdentityLookup:
    """Consulta pwd/grp (solo POSIX)."""

    def user_id(self, name: str) -> int:
        import pwd
        return pwd.getpwnam(name).pw_uid

    def group_id(self, name: str) -> int:
        import grp
        return grp.getgrnam(name).gr_gid


class IdentityResolver:
    """Resuelve owner/group simbólicos y normaliza el id devuelto."""

    def __init__(self, lookup: Optional[IdentityLookup] = None):
        self.lookup = lookup or PosixIdentityLookup()

    def resolve_user(self, name: str) -> int:
        try:
            uid = self.lookup.user_id(name)
        except (LookupError, OSError) as e:
            raise IdentityNotFound("user", name) from e
        return normalize_identifier(uid)

    def resolve_group(self, name: str) -> int:
        try:
            gid = self.lookup.group_id(name)
        except (LookupError, OSError) as e:
            raise IdentityNotFound("group", name) from e
        return normalize_identifier(gid)

    def resolve(self, kind: str, name: str) -> int:
        if kind == "user":
            return self.resolve_user(name)
        return self.resolve_group(name)
