"""Password policy record and field-by-field policy resolution."""
from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional
from passu.config.settings import DEFAULT_POLICY_LENGTH, DEFAULT_POLICY_FLAGS
from .errors import InvalidPolicyError

# attribute -> document key
_KEYS = {
	'length': 'length',
	'use_lowercase': 'useLowercase',
	'use_uppercase': 'useUppercase',
	'use_numbers': 'useNumbers',
	'use_special': 'useSpecial',
}

_LABELS = {
	'use_lowercase': 'lowercase',
	'use_uppercase': 'uppercase',
	'use_numbers': 'numbers',
	'use_special': 'special characters',
}

@dataclass(frozen=True)
class PasswordPolicy:
	"""Sparse policy; ``None`` means "inherit from whatever it is merged against"."""
	length: Optional[int] = None
	use_lowercase: Optional[bool] = None
	use_uppercase: Optional[bool] = None
	use_numbers: Optional[bool] = None
	use_special: Optional[bool] = None

	@classmethod
	def builtin_default(cls) -> 'PasswordPolicy':
		return cls.from_dict({'length': DEFAULT_POLICY_LENGTH, **DEFAULT_POLICY_FLAGS})

	@classmethod
	def from_dict(cls, raw: Optional[Dict[str, Any]]) -> 'PasswordPolicy':
		if raw is None:
			return cls()
		if not isinstance(raw, dict):
			raise TypeError('Policy must be an object')
		values = {}
		for attr, key in _KEYS.items():
			val = raw.get(key)
			if val is None:
				continue
			if attr == 'length':
				if isinstance(val, bool) or not isinstance(val, int):
					raise TypeError('Policy length must be an integer')
			elif not isinstance(val, bool):
				raise TypeError(f'Policy {key} must be a boolean')
			values[attr] = val
		return cls(**values)

	def to_dict(self) -> Dict[str, Any]:
		"""Document form; unset fields are omitted."""
		out = {}
		for attr, key in _KEYS.items():
			val = getattr(self, attr)
			if val is not None:
				out[key] = val
		return out

	def is_resolved(self) -> bool:
		return all(getattr(self, f.name) is not None for f in fields(self))

	def is_empty(self) -> bool:
		return not any(getattr(self, f.name) is not None for f in fields(self))

	def describe(self, default: Optional['PasswordPolicy'] = None) -> str:
		"""Two-line summary, ``Length: ...`` and ``Characters: ...``.

		When ``default`` is given, fields inherited from it are marked
		``(default)``.
		"""
		if default is None:
			length = f'{self.length or 0}'
		elif self.length is not None:
			length = f'{self.length}'
		else:
			length = f'{default.length or 0} (default)'
		used = []
		for attr, label in _LABELS.items():
			val = getattr(self, attr)
			if val:
				used.append(label)
			elif val is None and default is not None and getattr(default, attr):
				used.append(f'{label} (default)')
		return f"Length: {length}\nCharacters: {', '.join(used)}"

def resolve(default: PasswordPolicy, override: Optional[PasswordPolicy]) -> PasswordPolicy:
	"""Take each field from ``override`` when set, else from ``default``."""
	if override is None:
		return default
	changes = {f.name: getattr(override, f.name) for f in fields(override) if getattr(override, f.name) is not None}
	return replace(default, **changes)

def merge_default(current: PasswordPolicy, partial: PasswordPolicy) -> PasswordPolicy:
	"""New default policy from ``partial`` patched onto ``current``.

	Raises InvalidPolicyError when the resulting length is not positive.
	"""
	merged = resolve(current, partial)
	if merged.length is None or merged.length <= 0:
		raise InvalidPolicyError("Password policy length can't be 0 or lower")
	return merged
