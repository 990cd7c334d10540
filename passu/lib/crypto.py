"""Cipher layer: master-password key derivation + AES-256-CBC.

The key is the 32-character hex MD5 digest of the master password, used
directly as raw key bytes. This is a single fast hash, not a real KDF;
it is kept for compatibility with existing vault files and is weak
against offline guessing.
"""
from __future__ import annotations
import hashlib, secrets
from typing import Tuple
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend
from passu.config.settings import KEY_LENGTH, IV_LENGTH, BLOCK_SIZE_BITS
from .errors import CipherError

class VaultCrypto:
	def __init__(self):
		self._backend = default_backend()

	def generate_iv(self) -> bytes:
		return secrets.token_bytes(IV_LENGTH)

	def derive_key(self, password: str) -> bytes:
		return hashlib.md5(password.encode('utf-8')).hexdigest().encode('ascii')

	def encrypt(self, data: bytes, key: bytes) -> Tuple[bytes, bytes]:
		"""Encrypt ``data`` under a fresh random IV; returns ``(iv, ciphertext)``."""
		if len(key) != KEY_LENGTH: raise CipherError('Bad key length')
		iv = self.generate_iv()
		padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
		padded = padder.update(data) + padder.finalize()
		enc = Cipher(algorithms.AES(key), modes.CBC(iv), backend=self._backend).encryptor()
		return iv, enc.update(padded) + enc.finalize()

	def decrypt(self, iv: bytes, ciphertext: bytes, key: bytes) -> bytes:
		if len(key) != KEY_LENGTH: raise CipherError('Bad key length')
		if len(iv) != IV_LENGTH: raise CipherError('Bad IV length')
		if not ciphertext or len(ciphertext) % IV_LENGTH:
			raise CipherError('Ciphertext is not block aligned')
		dec = Cipher(algorithms.AES(key), modes.CBC(iv), backend=self._backend).decryptor()
		padded = dec.update(ciphertext) + dec.finalize()
		unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
		try:
			return unpadder.update(padded) + unpadder.finalize()
		except ValueError:
			raise CipherError('Bad padding') from None

_default = VaultCrypto()

def derive_key(password: str) -> bytes:
	return _default.derive_key(password)

def encrypt(key: bytes, plaintext: bytes) -> Tuple[bytes, bytes]:
	return _default.encrypt(plaintext, key)

def decrypt(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
	return _default.decrypt(iv, ciphertext, key)
