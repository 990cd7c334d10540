"""passu: a local, single-file encrypted password vault."""

__version__ = '1.0.0'
