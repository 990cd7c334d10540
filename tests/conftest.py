import pytest
from passu.lib.crypto import VaultCrypto
from legacy_vault import LEGACY_IV


@pytest.fixture
def fixed_iv(monkeypatch):
    monkeypatch.setattr(VaultCrypto, 'generate_iv', lambda self: LEGACY_IV)
    return LEGACY_IV


@pytest.fixture
def vault_path(monkeypatch, tmp_path):
    path = tmp_path / 'passwords.passu'
    monkeypatch.setenv('PASSU_FILE', str(path))
    return path
