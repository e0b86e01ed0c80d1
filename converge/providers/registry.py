"""
Construcción de providers a partir de recursos declarados.

Conjunto cerrado de variantes: cada tipo de recurso tiene su provider;
el despacho es por tipo, no por nombre.
"""

from typing import Optional, Union

from rich.console import Console

from converge.core.errors import ConfigError
from converge.core.infra.base import BaseProvider
from converge.core.manifest.models import EnvResource, FileResource, RemoteFileCacheResource
from converge.core.runtime.state import ResourceState
from converge.providers.env.backend import EnvBackend, ProcessEnvMirror
from converge.providers.env.merger import DelimitedEnvMerger
from converge.providers.file_access.backend import FileBackend
from converge.providers.file_access.controller import FileAccessController
from converge.providers.file_access.identity import IdentityResolver
from converge.providers.remote_file.cache_control import CacheControlStore
from converge.providers.remote_file.file_cache import FileCache


DeclaredResource = Union[FileResource, EnvResource, RemoteFileCacheResource]


class ProviderFactory:
    """Colaboradores compartidos por todos los providers de una ejecución."""

    def __init__(
        self,
        resolver: Optional[IdentityResolver] = None,
        file_backend: Optional[FileBackend] = None,
        env_backend: Optional[EnvBackend] = None,
        env_mirror: Optional[ProcessEnvMirror] = None,
        file_cache: Optional[FileCache] = None,
        console: Optional[Console] = None,
    ):
        self.resolver = resolver
        self.file_backend = file_backend
        self.env_backend = env_backend
        self.env_mirror = env_mirror
        self.file_cache = file_cache
        self.console = console

    def build(self, resource: DeclaredResource) -> BaseProvider:
        if isinstance(resource, FileResource):
            return FileAccessController(
                ResourceState(resource.path, resource.spec()),
                resolver=self.resolver,
                backend=self.file_backend,
                console=self.console,
            )
        if isinstance(resource, EnvResource):
            return DelimitedEnvMerger(
                ResourceState(resource.key_name, resource.spec()),
                action=resource.action,
                delim=resource.delim,
                backend=self.env_backend,
                mirror=self.env_mirror,
                console=self.console,
            )
        if isinstance(resource, RemoteFileCacheResource):
            return CacheControlStore(
                resource.uri,
                file_cache=self.file_cache,
                desired=resource.spec(),
                console=self.console,
            )
        raise ConfigError(f"Tipo de recurso no soportado: {type(resource).__name__}")
