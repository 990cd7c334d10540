"""Vault: the master key, default policy and entry store of one session.

Open::

	bytes -> envelope.decode -> crypto.decrypt -> JSON -> Vault

Save::

	Vault -> JSON -> crypto.encrypt (fresh IV) -> envelope.encode -> bytes

A Vault is not thread safe; callers serialize access.
"""
from __future__ import annotations
import json, logging
from typing import Any, Dict, List, Optional
from . import crypto, envelope
from .entries import EntryStore, PasswordEntry
from .errors import CipherError, MalformedEnvelopeError, VaultOpenError, EntryNotFoundError, DuplicateEntryError
from .generator import generate
from .policy import PasswordPolicy, resolve, merge_default

log = logging.getLogger(__name__)

OPEN_ERROR = 'Failed to open password file. Either the file is corrupted or you provided an invalid password.'

class Vault:
	def __init__(self, master_password: str, default_policy: Optional[PasswordPolicy] = None, entries: Optional[List[PasswordEntry]] = None):
		self._key = crypto.derive_key(master_password)
		self._policy = default_policy or PasswordPolicy.builtin_default()
		self._store = EntryStore(entries)
		self._modified = False

	@classmethod
	def create(cls, master_password: str) -> 'Vault':
		return cls(master_password)

	@classmethod
	def open(cls, data: bytes, master_password: str) -> 'Vault':
		"""Decrypt ``data`` with ``master_password``.

		Any framing, cipher or parse failure raises the same VaultOpenError.
		"""
		try:
			key = crypto.derive_key(master_password)
			iv, ciphertext = envelope.decode(data)
			doc = json.loads(crypto.decrypt(key, iv, ciphertext).decode('utf-8'))
			vault = cls._from_document(master_password, doc)
		except (MalformedEnvelopeError, CipherError, DuplicateEntryError, ValueError, KeyError, TypeError):
			log.warning('Vault open failed')
			raise VaultOpenError(OPEN_ERROR) from None
		log.debug('Vault opened with %d entries', len(vault))
		return vault

	@classmethod
	def _from_document(cls, master_password: str, doc: Any) -> 'Vault':
		if not isinstance(doc, dict):
			raise TypeError('Document must be an object')
		raw_entries = doc.get('entries', [])
		if not isinstance(raw_entries, list):
			raise TypeError('Entries must be a list')
		policy = resolve(PasswordPolicy.builtin_default(), PasswordPolicy.from_dict(doc.get('passwordPolicy')))
		return cls(master_password, policy, [PasswordEntry.from_dict(e) for e in raw_entries])

	# --- state ---

	@property
	def modified(self) -> bool:
		return self._modified

	def __len__(self) -> int:
		return len(self._store)

	def __contains__(self, name: object) -> bool:
		return name in self._store

	def set_password(self, master_password: str) -> None:
		"""Use a new master password for subsequent saves."""
		self._key = crypto.derive_key(master_password)
		self._modified = True

	def to_document(self) -> Dict[str, Any]:
		return {
			'passwordPolicy': self._policy.to_dict(),
			'entries': [e.to_dict() for e in self._store],
		}

	document = property(to_document)

	def save(self) -> bytes:
		payload = json.dumps(self.to_document(), separators=(',', ':'), ensure_ascii=False).encode('utf-8')
		iv, ciphertext = crypto.encrypt(self._key, payload)
		data = envelope.encode(iv, ciphertext)
		self._modified = False
		log.info('Vault saved (%d entries)', len(self._store))
		return data

	# --- policy ---

	@property
	def default_policy(self) -> PasswordPolicy:
		return self._policy

	@default_policy.setter
	def default_policy(self, partial: PasswordPolicy) -> None:
		self.set_default_policy(partial)

	def set_default_policy(self, partial: PasswordPolicy) -> PasswordPolicy:
		self._policy = merge_default(self._policy, partial)
		self._modified = True
		return self._policy

	def effective_policy(self, name: str) -> PasswordPolicy:
		return resolve(self._policy, self._require(name).policy_override)

	# --- entries ---

	def all_entries(self) -> List[PasswordEntry]:
		return self._store.all()

	def find_entries(self, prefix: str = '') -> List[PasswordEntry]:
		return self._store.find(prefix)

	def get_entry(self, name: str) -> Optional[PasswordEntry]:
		return self._store.get(name)

	def add_entry(self, name: str, password: str, description: Optional[str] = None, policy_override: Optional[PasswordPolicy] = None) -> PasswordEntry:
		entry = self._store.add(name, password, description, policy_override)
		self._modified = True
		return entry

	def update_entry(self, name: str, new_name: Optional[str] = None, new_password: Optional[str] = None,
			new_description: Optional[str] = None, new_policy_override: Optional[PasswordPolicy] = None) -> PasswordEntry:
		entry = self._store.update(name, new_name, new_password, new_description, new_policy_override)
		self._modified = True
		return entry

	def remove_entry(self, name: str) -> PasswordEntry:
		entry = self._store.remove(name)
		self._modified = True
		return entry

	def generate_password(self, name: str) -> PasswordEntry:
		"""Replace the entry's password with one generated from its effective policy."""
		password = generate(self.effective_policy(name))
		return self.update_entry(name, new_password=password)

	def _require(self, name: str) -> PasswordEntry:
		entry = self._store.get(name)
		if entry is None:
			raise EntryNotFoundError(f'Entry {name} not found.')
		return entry
