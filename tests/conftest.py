"""Fixtures compartidas: colaboradores falsos y rutas de estado aisladas."""

import pytest

from converge.providers.file_access.identity import IdentityResolver
from tests.fakes import FakeEnvBackend, FakeFileBackend, FakeIdentityLookup, RecordingFileCache


@pytest.fixture(autouse=True)
def isolated_state_root(tmp_path, monkeypatch):
    """Nunca tocar /var/lib/converge desde los tests."""
    root = tmp_path / "state"
    monkeypatch.setenv("CONVERGE_STATE_ROOT", str(root))
    monkeypatch.delenv("CONVERGE_ENV_FILE", raising=False)
    return root


@pytest.fixture
def lookup():
    return FakeIdentityLookup(
        users={"toor": 2342, "nobody": 4294967294, "bigdude": 4294967286},
        groups={"wheel": 2342, "staff": 20},
    )


@pytest.fixture
def resolver(lookup):
    return IdentityResolver(lookup)


@pytest.fixture
def file_backend():
    return FakeFileBackend(uid=99, gid=99, mode=0o444)


@pytest.fixture
def env_backend():
    return FakeEnvBackend(lookup={"SystemRoot": "D:\\Windows"})


@pytest.fixture
def file_cache(tmp_path):
    return RecordingFileCache(tmp_path / "file_cache")
