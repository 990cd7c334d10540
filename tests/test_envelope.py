import pytest
from passu.lib import envelope
from passu.lib.errors import MalformedEnvelopeError
from legacy_vault import LEGACY_FILE, LEGACY_IV, LEGACY_CIPHERTEXT

def test_encode_layout():
    data = envelope.encode(b'\xaa' * 16, b'ciphertext')
    assert data[0] == 16
    assert data[1:17] == b'\xaa' * 16
    assert data[17:21] == b'\x00\x00\x00\x0a'
    assert data[21:] == b'ciphertext'
    assert len(data) == 1 + 16 + 4 + 10

def test_encode_known_file():
    assert envelope.encode(LEGACY_IV, LEGACY_CIPHERTEXT) == LEGACY_FILE

def test_decode_known_file():
    iv, ct = envelope.decode(LEGACY_FILE)
    assert iv == LEGACY_IV
    assert ct == LEGACY_CIPHERTEXT

def test_decode_other_iv_length():
    iv, ct = envelope.decode(b'\x03abc\x00\x00\x00\x02xy')
    assert (iv, ct) == (b'abc', b'xy')

def test_decode_ignores_trailing_bytes():
    assert envelope.decode(b'\x01z\x00\x00\x00\x01qTRAILING') == (b'z', b'q')

def test_decode_empty_payloads():
    assert envelope.decode(b'\x00\x00\x00\x00\x00') == (b'', b'')

@pytest.mark.parametrize('data', [
    b'',
    b'\x10' + b'\x00' * 10,                       # iv runs past end
    b'\x02ab\x00\x00',                            # length field truncated
    b'\x02ab\x00\x00\x00\x05abc',                 # ciphertext runs past end
    LEGACY_FILE[:-1],
])
def test_decode_malformed(data):
    with pytest.raises(MalformedEnvelopeError):
        envelope.decode(data)

def test_encode_rejects_oversized_iv():
    with pytest.raises(MalformedEnvelopeError):
        envelope.encode(b'x' * 256, b'')
