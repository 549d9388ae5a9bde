"""Small helpers: version information and a basic domain check."""

from __future__ import annotations

import platform
import sys

VERSION = "1.0.0"
MAX_DOMAIN_LENGTH = 253


def get_version() -> str:
    """Return the application version."""
    return VERSION


def get_build_info() -> str:
    """Return a description of the running interpreter and platform."""
    return f"Python {platform.python_version()} {sys.platform}/{platform.machine()}"


def is_valid_domain(domain: str) -> bool:
    """Check that a domain is non-empty, not too long and not dot-delimited."""
    if not domain or len(domain) > MAX_DOMAIN_LENGTH:
        return False
    return not (domain.startswith(".") or domain.endswith("."))