"""Project configuration settings.

Constants shared by the vault engine and the command front end. Only the
front end and the storage layer consult environment overrides.
"""

from pathlib import Path
import os

# Security / crypto
KEY_LENGTH = 32       # AES-256, raw bytes of the hex MD5 digest
IV_LENGTH = 16        # AES block size
BLOCK_SIZE_BITS = 128  # PKCS7 padding unit

# Envelope framing
IV_LENGTH_FORMAT = '>B'
CIPHERTEXT_LENGTH_FORMAT = '>I'

# Entries
NAME_PATTERN = r'^[A-Za-z0-9-]+$'

# Character sets, in generation order
LOWERCASE_CHARS = 'abcdefghijklmnopqrstuvwxyz'
UPPERCASE_CHARS = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
NUMBER_CHARS = '0123456789'
SPECIAL_CHARS = '+-=/\\'

# Built-in default policy of a fresh vault
DEFAULT_POLICY_LENGTH = 32
DEFAULT_POLICY_FLAGS = {
	'useLowercase': True,
	'useUppercase': True,
	'useNumbers': True,
	'useSpecial': True,
}

# Vault file
DEFAULT_VAULT_PATH = Path(os.environ.get('PASSU_FILE', 'passu_data/passwords.passu'))
BACKUP_SUFFIX = '.backup'

# Logging
LOG_LEVEL = os.environ.get('PASSU_LOG_LEVEL', 'WARNING').upper()

__all__ = [
	'KEY_LENGTH','IV_LENGTH','BLOCK_SIZE_BITS','IV_LENGTH_FORMAT','CIPHERTEXT_LENGTH_FORMAT',
	'NAME_PATTERN','LOWERCASE_CHARS','UPPERCASE_CHARS','NUMBER_CHARS','SPECIAL_CHARS',
	'DEFAULT_POLICY_LENGTH','DEFAULT_POLICY_FLAGS','DEFAULT_VAULT_PATH','BACKUP_SUFFIX','LOG_LEVEL'
]
