"""Character-set password generator.

Each active character class gets an equal quota of ``ceil(length / k)``
random characters. The surplus over ``length`` (always fewer than ``k``
characters) is taken one character each from randomly chosen classes, and
the pool is shuffled. Whenever ``length`` is at least the number of active
classes, every class appears at least once.
"""
from __future__ import annotations
import math, random, secrets
from typing import List, Optional
from passu.config.settings import LOWERCASE_CHARS, UPPERCASE_CHARS, NUMBER_CHARS, SPECIAL_CHARS
from .errors import EmptyCharsetError, InvalidPolicyError
from .policy import PasswordPolicy

_CHARSETS = (
	('use_lowercase', LOWERCASE_CHARS),
	('use_uppercase', UPPERCASE_CHARS),
	('use_numbers', NUMBER_CHARS),
	('use_special', SPECIAL_CHARS),
)

def active_charsets(policy: PasswordPolicy) -> List[str]:
	return [chars for attr, chars in _CHARSETS if getattr(policy, attr)]

def generate(policy: PasswordPolicy, rng: Optional[random.Random] = None) -> str:
	if policy.length is None or policy.length <= 0:
		raise InvalidPolicyError("Password policy length can't be 0 or lower")
	sets = active_charsets(policy)
	if not sets:
		raise EmptyCharsetError('Password policy enables no character set')
	rng = rng or secrets.SystemRandom()
	per_set = math.ceil(policy.length / len(sets))
	quotas = [per_set] * len(sets)
	for idx in rng.sample(range(len(sets)), per_set * len(sets) - policy.length):
		quotas[idx] -= 1
	chars = [rng.choice(charset) for charset, n in zip(sets, quotas) for _ in range(n)]
	rng.shuffle(chars)  # Fisher-Yates
	return ''.join(chars)
