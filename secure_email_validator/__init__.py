"""Validate e-mail addresses and check their domains for secure mail delivery."""

__version__ = "1.0.0"

__all__ = ["__version__"]