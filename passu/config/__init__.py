"""Configuration settings and constants for passu.

Re-exports everything from :mod:`passu.config.settings` so callers can
write ``from passu.config import KEY_LENGTH``. Keep the values in
``settings.py``; this module only forwards them.
"""

from .settings import *  # noqa: F401,F403
from .settings import __all__  # noqa: F401
