"""Envelope codec for the on-disk vault layout.

File format::

	[1 byte]  iv length N
	[N bytes] iv
	[4 bytes] ciphertext length M (big-endian)
	[M bytes] ciphertext

Only frame integrity is checked here; the payload is opaque.
"""
from __future__ import annotations
import struct
from typing import Tuple
from passu.config.settings import IV_LENGTH_FORMAT, CIPHERTEXT_LENGTH_FORMAT
from .errors import MalformedEnvelopeError

_IV_LEN = struct.Struct(IV_LENGTH_FORMAT)
_CT_LEN = struct.Struct(CIPHERTEXT_LENGTH_FORMAT)

def encode(iv: bytes, ciphertext: bytes) -> bytes:
	try:
		return _IV_LEN.pack(len(iv)) + iv + _CT_LEN.pack(len(ciphertext)) + ciphertext
	except struct.error as e:
		raise MalformedEnvelopeError(f'Cannot frame payload: {e}') from None

def decode(data: bytes) -> Tuple[bytes, bytes]:
	"""Split ``data`` into ``(iv, ciphertext)``.

	Trailing bytes after the declared ciphertext are ignored.
	"""
	data = bytes(data)
	if len(data) < _IV_LEN.size:
		raise MalformedEnvelopeError('Envelope is empty')
	(iv_len,) = _IV_LEN.unpack_from(data, 0)
	pos = _IV_LEN.size
	if pos + iv_len + _CT_LEN.size > len(data):
		raise MalformedEnvelopeError('IV length runs past end of input')
	iv = data[pos:pos + iv_len]
	pos += iv_len
	(ct_len,) = _CT_LEN.unpack_from(data, pos)
	pos += _CT_LEN.size
	if pos + ct_len > len(data):
		raise MalformedEnvelopeError('Ciphertext length runs past end of input')
	return iv, data[pos:pos + ct_len]
