"""
Modelos del estado deseado (agnósticos de interfaz y filesystem).

Un modelo por tipo de recurso, con campos opcionales explícitos: un campo en None
no se gestiona. En el estado actual, model_fields_set distingue "no sondeado"
de "sondeado y vale None".
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator


IdentityValue = Union[StrictInt, StrictStr]
ModeValue = Union[StrictInt, StrictStr]


class EnvAction(str, Enum):
    CREATE = "create"
    MODIFY = "modify"
    DELETE = "delete"


# --- Specs (deseado / actual) ---

class FileAccessSpec(BaseModel):
    """owner/group: nombre o id numérico; mode: cadena octal ("0644") o entero."""
    owner: Optional[IdentityValue] = None
    group: Optional[IdentityValue] = None
    mode: Optional[ModeValue] = None


class EnvSpec(BaseModel):
    """Valor de una variable de entorno. En el estado actual, value None = no existe."""
    value: Optional[str] = None


class CacheControlRecord(BaseModel):
    """Registro persistido de validadores HTTP para una URI."""
    etag: Optional[str] = None
    mtime: Optional[str] = None
    checksum: Optional[str] = None


# --- Recursos declarados (variantes etiquetadas por kind) ---

class FileResource(BaseModel):
    kind: Literal["file"] = "file"
    path: str = Field(..., description="Ruta del archivo gestionado")
    owner: Optional[IdentityValue] = None
    group: Optional[IdentityValue] = None
    mode: Optional[ModeValue] = None

    def spec(self) -> FileAccessSpec:
        return FileAccessSpec(owner=self.owner, group=self.group, mode=self.mode)


class EnvResource(BaseModel):
    kind: Literal["env"] = "env"
    key_name: str = Field(..., alias="name", description="Nombre de la variable (ej: PATH)")
    value: Optional[str] = None
    delim: Optional[str] = Field(None, description="Separador de elementos (ej: ':' o ';')")
    action: EnvAction = EnvAction.CREATE

    class Config:
        populate_by_name = True

    @field_validator("key_name")
    @classmethod
    def _name_not_empty(cls, v: str) -> str:
        if not v or not v.strip() or "=" in v:
            raise ValueError("el nombre de la variable no puede estar vacío ni contener '='")
        return v

    @field_validator("delim")
    @classmethod
    def _delim_not_empty(cls, v: Optional[str]) -> Optional[str]:
        # "" equivale a sin separador
        return v or None

    def spec(self) -> EnvSpec:
        return EnvSpec(value=self.value)


class RemoteFileCacheResource(BaseModel):
    kind: Literal["remote_file_cache"] = "remote_file_cache"
    uri: str = Field(..., description="URI del recurso remoto")
    etag: Optional[str] = None
    mtime: Optional[str] = None
    checksum: Optional[str] = Field(None, description="Checksum del artefacto en disco")

    def spec(self) -> CacheControlRecord:
        return CacheControlRecord(etag=self.etag, mtime=self.mtime, checksum=self.checksum)


Resource = Annotated[
    Union[FileResource, EnvResource, RemoteFileCacheResource],
    Field(discriminator="kind"),
]


class Manifest(BaseModel):
    version: int = Field(1, description="Versión del esquema")
    resources: List[Resource] = Field(default_factory=list)
