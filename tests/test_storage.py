import pytest
from pathlib import Path
from passu.lib.errors import StorageError, VaultOpenError
from passu.lib.storage import VaultStorage
from legacy_vault import LEGACY_FILE, LEGACY_PASSWORD

def make_storage(tmp_path: Path):
    return VaultStorage(tmp_path / 'sub' / 'vault.passu')

def test_create_and_load(tmp_path: Path):
    vs = make_storage(tmp_path)
    assert not vs.exists()
    vs.create('master')
    assert vs.exists()
    v = vs.load('master')
    assert len(v) == 0 and not v.modified

def test_create_twice(tmp_path: Path):
    vs = make_storage(tmp_path)
    vs.create('pw')
    with pytest.raises(StorageError):
        vs.create('pw')
    vs.create('other', force=True)
    vs.load('other')

def test_load_missing(tmp_path: Path):
    with pytest.raises(StorageError):
        make_storage(tmp_path).load('pw')

def test_load_wrong_password(tmp_path: Path):
    vs = make_storage(tmp_path)
    vs.create('pw1')
    with pytest.raises(VaultOpenError):
        vs.load('pw2')

def test_save_and_reload(tmp_path: Path):
    vs = make_storage(tmp_path)
    v = vs.create('pw')
    v.add_entry('x', 'secret')
    vs.save(v)
    assert not v.modified
    assert vs.load('pw').get_entry('x').password == 'secret'
    assert not list(vs.path.parent.glob('*.tmp'))

def test_reads_legacy_file(tmp_path: Path):
    vs = make_storage(tmp_path)
    vs.write(LEGACY_FILE)
    assert vs.read() == LEGACY_FILE
    assert vs.load(LEGACY_PASSWORD).get_entry('github').password == 'hunter2'

def test_env_path(vault_path: Path):
    assert VaultStorage().path == vault_path

def test_backup(tmp_path: Path):
    vs = make_storage(tmp_path)
    with pytest.raises(StorageError):
        vs.backup()
    vs.create('pw')
    auto = vs.backup()
    assert auto.name.startswith('vault.passu.') and auto.name.endswith('.backup')
    dest = vs.backup(tmp_path / 'backups' / 'copy.passu')
    assert dest.read_bytes() == vs.path.read_bytes() == auto.read_bytes()
