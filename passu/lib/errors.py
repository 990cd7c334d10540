"""Error taxonomy shared by the vault engine and its front end.

Every failure is raised synchronously at the offending call and leaves
the vault's in-memory state unchanged.
"""
from __future__ import annotations

class PassuError(Exception):
	pass

class InvalidNameError(PassuError, ValueError):
	"""Entry name does not match ``NAME_PATTERN``."""

class DuplicateEntryError(PassuError):
	"""Another entry already uses the name."""

class EntryNotFoundError(PassuError, KeyError):
	"""Operation targets a name that is not in the vault."""

	def __str__(self) -> str:
		# KeyError quotes its argument; keep plain messages
		return str(self.args[0]) if self.args else ''

class InvalidPolicyError(PassuError, ValueError):
	"""Resolved password length is zero or negative."""

class EmptyCharsetError(PassuError, ValueError):
	"""Generation requested with no active character class."""

class MalformedEnvelopeError(PassuError):
	"""Declared envelope lengths run past the end of the input."""

class CipherError(PassuError):
	"""Wrong key or malformed IV/ciphertext."""

class VaultOpenError(PassuError):
	"""Bytes could not be opened as a vault.

	Deliberately does not say whether the password was wrong or the file
	is corrupt.
	"""

class StorageError(PassuError):
	"""Vault file missing, already present, or unreadable."""
