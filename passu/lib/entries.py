"""Entry layer: password entry values + the ordered entry store."""
from __future__ import annotations
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Optional
from passu.config.settings import NAME_PATTERN
from .errors import InvalidNameError, DuplicateEntryError, EntryNotFoundError
from .policy import PasswordPolicy

_NAME_RE = re.compile(NAME_PATTERN)

def validate_name(name: str) -> str:
	if not isinstance(name, str) or not _NAME_RE.fullmatch(name):
		raise InvalidNameError('Name must only contain alphabetic characters, numbers and dashes')
	return name

@dataclass(frozen=True)
class PasswordEntry:
	name: str
	password: str
	description: str = ''
	policy_override: PasswordPolicy = field(default_factory=PasswordPolicy)

	@classmethod
	def from_dict(cls, raw: Dict[str, Any]) -> 'PasswordEntry':
		if not isinstance(raw, dict):
			raise TypeError('Entry must be an object')
		name, password = raw['name'], raw['password']
		if not isinstance(name, str) or not isinstance(password, str):
			raise TypeError('Entry name and password must be strings')
		return cls(name, password, raw.get('description') or '', PasswordPolicy.from_dict(raw.get('policyOverride')))

	def to_dict(self) -> Dict[str, Any]:
		return {
			'name': self.name,
			'password': self.password,
			'description': self.description,
			'policyOverride': self.policy_override.to_dict(),
		}

class EntryStore:
	"""Ordered collection of entries keyed by unique name.

	Entries are immutable; ``update`` swaps in a new value at the same
	position. Every operation either completes or leaves the store as it
	was.
	"""

	def __init__(self, entries: Optional[List[PasswordEntry]] = None):
		self._entries: List[PasswordEntry] = []
		self._index: Dict[str, int] = {}
		for e in entries or []:
			if e.name in self._index:
				raise DuplicateEntryError(f'Entry {e.name} already exists.')
			self._index[e.name] = len(self._entries)
			self._entries.append(e)

	def __len__(self) -> int:
		return len(self._entries)

	def __iter__(self) -> Iterator[PasswordEntry]:
		return iter(list(self._entries))

	def __contains__(self, name: object) -> bool:
		return name in self._index

	def all(self) -> List[PasswordEntry]:
		return list(self._entries)

	def find(self, prefix: str = '') -> List[PasswordEntry]:
		return [e for e in self._entries if e.name.startswith(prefix)]

	def get(self, name: str) -> Optional[PasswordEntry]:
		idx = self._index.get(name)
		return None if idx is None else self._entries[idx]

	def add(self, name: str, password: str, description: Optional[str] = None, policy_override: Optional[PasswordPolicy] = None) -> PasswordEntry:
		validate_name(name)
		if name in self._index:
			raise DuplicateEntryError(f'Entry {name} already exists.')
		entry = PasswordEntry(name, password, description or '', policy_override or PasswordPolicy())
		self._index[name] = len(self._entries)
		self._entries.append(entry)
		return entry

	def update(self, name: str, new_name: Optional[str] = None, new_password: Optional[str] = None,
			new_description: Optional[str] = None, new_policy_override: Optional[PasswordPolicy] = None) -> PasswordEntry:
		"""Replace the entry called ``name``; ``None`` arguments keep the old field."""
		idx = self._require(name)
		if new_name is not None:
			validate_name(new_name)
			other = self._index.get(new_name)
			if other is not None and other != idx:
				raise DuplicateEntryError(f'Entry {new_name} already exists.')
		old = self._entries[idx]
		changes: Dict[str, Any] = {}
		if new_name is not None: changes['name'] = new_name
		if new_password is not None: changes['password'] = new_password
		if new_description is not None: changes['description'] = new_description
		if new_policy_override is not None: changes['policy_override'] = new_policy_override
		entry = replace(old, **changes)
		self._entries[idx] = entry
		if entry.name != old.name:
			del self._index[old.name]
			self._index[entry.name] = idx
		return entry

	def remove(self, name: str) -> PasswordEntry:
		idx = self._require(name)
		entry = self._entries.pop(idx)
		del self._index[name]
		for n, i in self._index.items():
			if i > idx:
				self._index[n] = i - 1
		return entry

	def _require(self, name: str) -> int:
		idx = self._index.get(name)
		if idx is None:
			raise EntryNotFoundError(f'Entry {name} not found.')
		return idx
