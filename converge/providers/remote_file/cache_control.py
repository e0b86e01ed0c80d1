"""
CacheControlStore: validadores HTTP (ETag / Last-Modified) por URI.

La clave se deriva de la URI sin credenciales: una parte legible (truncada a 64
caracteres) más el digest de la URI, para que el nombre sea seguro en disco,
acotado y sin colisiones.

  remote_file/http___www_google_com_robots_txt-6dc1b24315d0cff764d30344199c6f7b.json

Las entradas con la clave antigua (md5) se migran una sola vez a la nueva (sha256).
"""

import hashlib
import re
from typing import List, Optional
from urllib.parse import urlsplit, urlunsplit

from pydantic import ValidationError as PydanticValidationError
from rich.console import Console

from converge.core.infra.base import BaseProvider
from converge.core.manifest.models import CacheControlRecord
from converge.core.runtime.state import ResourceState, StateDiff
from converge.providers.remote_file.file_cache import FileCache


CACHE_NAMESPACE = "remote_file"
FRIENDLY_NAME_MAX_LENGTH = 64
DIGEST_HEX_LENGTH = 32
CACHE_FILE_EXTENSION = ".json"
REDACTED_PASSWORD = "XXXX"
RECORD_FIELDS = ("etag", "mtime", "checksum")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_]")


def sanitize_uri(uri: str) -> str:
    """Sustituye la contraseña (si hay credenciales) por XXXX."""
    parts = urlsplit(uri)
    if "@" not in parts.netloc:
        return uri
    userinfo, _, hostport = parts.netloc.rpartition("@")
    user = userinfo.split(":", 1)[0]
    return urlunsplit(parts._replace(netloc=f"{user}:{REDACTED_PASSWORD}@{hostport}"))


def _friendly_name(sanitized_uri: str) -> str:
    return _UNSAFE_CHARS.sub("_", sanitized_uri)[:FRIENDLY_NAME_MAX_LENGTH]


def cache_file_basename(sanitized_uri: str) -> str:
    digest = hashlib.sha256(sanitized_uri.encode("utf-8")).hexdigest()[:DIGEST_HEX_LENGTH]
    return f"{_friendly_name(sanitized_uri)}-{digest}{CACHE_FILE_EXTENSION}"


def legacy_cache_file_basename(sanitized_uri: str) -> str:
    digest = hashlib.md5(sanitized_uri.encode("utf-8"), usedforsecurity=False).hexdigest()
    return f"{_friendly_name(sanitized_uri)}-{digest}{CACHE_FILE_EXTENSION}"


def sanitized_cache_key(uri: str) -> str:
    return f"{CACHE_NAMESPACE}/{cache_file_basename(sanitize_uri(uri))}"


def legacy_cache_key(uri: str) -> str:
    return f"{CACHE_NAMESPACE}/{legacy_cache_file_basename(sanitize_uri(uri))}"


class CacheControlStore(BaseProvider):
    """
    Entrada de cache de validadores para una URI.

    etag/mtime/checksum son los valores vigentes; state.desired es lo que se quiere
    dejar persistido cuando se usa como provider.
    """

    name = "remote_file_cache"

    def __init__(
        self,
        uri: str,
        file_cache: Optional[FileCache] = None,
        desired: Optional[CacheControlRecord] = None,
        console: Optional[Console] = None,
    ):
        self.uri = sanitize_uri(uri)
        super().__init__(ResourceState(self.uri, desired or CacheControlRecord()), console)
        self.file_cache = file_cache if file_cache is not None else FileCache()
        self.etag: Optional[str] = None
        self.mtime: Optional[str] = None
        self.checksum: Optional[str] = None

    @classmethod
    def load_and_validate(
        cls,
        uri: str,
        current_checksum: Optional[str],
        file_cache: Optional[FileCache] = None,
        console: Optional[Console] = None,
    ) -> "CacheControlStore":
        """
        Carga la entrada y la invalida si no corresponde al artefacto en disco.
        Nunca falla por datos corruptos: en ese caso devuelve una entrada vacía.
        """
        store = cls(uri, file_cache=file_cache, console=console)
        store.load()
        store.validate_checksum(current_checksum)
        return store

    # --- claves ---

    @property
    def cache_key(self) -> str:
        return f"{CACHE_NAMESPACE}/{cache_file_basename(self.uri)}"

    @property
    def legacy_cache_key(self) -> str:
        return f"{CACHE_NAMESPACE}/{legacy_cache_file_basename(self.uri)}"

    # --- lectura ---

    def _load_json_data(self) -> Optional[bytes]:
        if self.file_cache.exists(self.cache_key):
            return self.file_cache.load(self.cache_key)
        if self.file_cache.exists(self.legacy_cache_key):
            data = self.file_cache.load(self.legacy_cache_key)
            # Migración única: la clave antigua no se vuelve a leer
            self.file_cache.store(self.cache_key, data)
            self.file_cache.delete(self.legacy_cache_key)
            self._say(f"[dim]cache migrada: {self.legacy_cache_key} → {self.cache_key}[/dim]")
            return data
        return None

    def load(self) -> bool:
        """True si se encontró un registro legible."""
        data = self._load_json_data()
        if data is None:
            return False
        try:
            record = CacheControlRecord.model_validate_json(data)
        except PydanticValidationError:
            self._say(f"[yellow]⚠ cache corrupta para {self.uri}; se ignora[/yellow]")
            self.reset()
            return False
        self.etag = record.etag
        self.mtime = record.mtime
        self.checksum = record.checksum
        return True

    def validate_checksum(self, current_checksum: Optional[str]) -> bool:
        """Sin artefacto en disco, o con otro contenido, los validadores no sirven."""
        if current_checksum is None or self.checksum != current_checksum:
            self.reset()
            return False
        return True

    def reset(self) -> None:
        self.etag = None
        self.mtime = None
        self.checksum = None

    # --- escritura ---

    def record(self) -> CacheControlRecord:
        return CacheControlRecord(etag=self.etag, mtime=self.mtime, checksum=self.checksum)

    def json_data(self) -> str:
        return self.record().model_dump_json()

    def save(self) -> None:
        """Siempre bajo la clave nueva."""
        self.file_cache.store(self.cache_key, self.json_data())

    # --- contrato de provider ---

    def load_current_state(self) -> ResourceState:
        """
        Registro vigente; solo los campos declarados.
        Con checksum declarado, un registro de otro artefacto cuenta como vacío.
        """
        self.reset()
        self.load()
        if self.state.desired.checksum is not None:
            self.validate_checksum(self.state.desired.checksum)
        probed = {f: getattr(self, f) for f in self.state.managed_fields()}
        self.state.current = CacheControlRecord(**probed)
        return self.state

    def _changed_fields(self) -> List[str]:
        return [
            f for f in RECORD_FIELDS
            if getattr(self.state.desired, f) is not None
            and self.state.current_value(f) != getattr(self.state.desired, f)
        ]

    def needs_update(self) -> bool:
        return bool(self._changed_fields())

    def describe_changes(self) -> List[str]:
        return [
            f"change {f} from '{self.state.current_value(f) or ''}' to '{getattr(self.state.desired, f)}'"
            for f in self._changed_fields()
        ]

    def detect_drift(self) -> List[StateDiff]:
        return [
            self._diff(f, getattr(self.state.desired, f), self.state.current_value(f))
            for f in self._changed_fields()
        ]

    def apply(self) -> bool:
        if not self.needs_update():
            return False
        for f in self._changed_fields():
            setattr(self, f, getattr(self.state.desired, f))
        self.save()
        self.state.mark_updated()
        self._say(f"[green]✔ cache guardada: {self.cache_key}[/green]")
        return True
