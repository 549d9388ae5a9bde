"""Settings shared by the e-mail checker."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TIMEOUT = 10


@dataclass
class Config:
    """Checker settings.

    ``timeout`` is the SMTP connection timeout in seconds; ``verbose``
    enables diagnostic messages on standard output.
    """

    timeout: int = DEFAULT_TIMEOUT
    verbose: bool = False


def default_config() -> Config:
    """Return a configuration holding the default values."""
    return Config(timeout=DEFAULT_TIMEOUT, verbose=False)