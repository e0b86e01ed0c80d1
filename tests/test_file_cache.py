"""Tests del blob store FileCache."""

import pytest

from converge.core.errors import ConfigError
from converge.providers.remote_file.file_cache import FileCache


def test_store_load_delete(tmp_path):
    cache = FileCache(tmp_path)
    assert not cache.exists("remote_file/a.json")
    cache.store("remote_file/a.json", '{"etag": "x"}')
    assert cache.exists("remote_file/a.json")
    assert cache.load("remote_file/a.json") == b'{"etag": "x"}'
    cache.delete("remote_file/a.json")
    assert not cache.exists("remote_file/a.json")


def test_store_accepts_bytes(tmp_path):
    cache = FileCache(tmp_path)
    cache.store("remote_file/b.json", b"{}")
    assert cache.load("remote_file/b.json") == b"{}"


def test_bytes_stored_verbatim(tmp_path):
    cache = FileCache(tmp_path)
    cache.store("remote_file/c.json", b"\xff\xfe{")
    assert cache.load("remote_file/c.json") == b"\xff\xfe{"


def test_load_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileCache(tmp_path).load("remote_file/missing.json")


@pytest.mark.parametrize("key", ["../escape.json", "/etc/passwd", ""])
def test_rejects_keys_outside_root(tmp_path, key):
    with pytest.raises(ConfigError):
        FileCache(tmp_path).exists(key)


def test_default_root_under_state_root(isolated_state_root):
    assert FileCache().root == (isolated_state_root / "cache").resolve()
