"""Blog platform backend: accounts, session tokens and author-owned posts."""

__version__ = "1.0.0"
