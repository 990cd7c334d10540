"""File persistence for vault bytes.

The vault engine only deals in bytes; this layer owns the path, atomic
writes and backups.
"""
from __future__ import annotations
import os, shutil, logging
from datetime import datetime
from pathlib import Path
from passu.config.settings import DEFAULT_VAULT_PATH, BACKUP_SUFFIX
from .errors import StorageError
from .vault import Vault

log = logging.getLogger(__name__)

class VaultStorage:
	def __init__(self, path: Path | str | None = None):
		# Resolve path dynamically to honor environment overrides in tests
		if path is not None:
			self.path = Path(path)
		else:
			env_path = os.environ.get('PASSU_FILE')
			self.path = Path(env_path) if env_path else DEFAULT_VAULT_PATH

	def exists(self) -> bool:
		return self.path.exists() and self.path.stat().st_size > 0

	def read(self) -> bytes:
		if not self.exists(): raise StorageError(f'No password file at {self.path}')
		try:
			return self.path.read_bytes()
		except OSError as e:
			raise StorageError(f'Cannot read {self.path}: {e}') from e

	def write(self, data: bytes) -> None:
		tmp = self.path.with_suffix(self.path.suffix + '.tmp')
		try:
			self.path.parent.mkdir(parents=True, exist_ok=True)
			tmp.write_bytes(data)
			os.replace(tmp, self.path)
		except OSError as e:
			tmp.unlink(missing_ok=True)
			raise StorageError(f'Cannot write {self.path}: {e}') from e
		log.info('Password database written to %s', self.path)

	def create(self, master_password: str, force: bool = False) -> Vault:
		if self.exists() and not force: raise StorageError('Password file already exists')
		vault = Vault.create(master_password)
		self.save(vault)
		return vault

	def load(self, master_password: str) -> Vault:
		return Vault.open(self.read(), master_password)

	def save(self, vault: Vault) -> None:
		self.write(vault.save())

	def backup(self, dest: Path | str | None = None) -> Path:
		if not self.exists(): raise StorageError('No vault to backup')
		if dest is None:
			stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
			dest = self.path.with_name(f'{self.path.name}.{stamp}{BACKUP_SUFFIX}')
		dest = Path(dest)
		dest.parent.mkdir(parents=True, exist_ok=True)
		shutil.copy2(self.path, dest)
		log.info('Vault backed up to %s', dest)
		return dest
