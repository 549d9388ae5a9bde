"""E-mail validation: format, normalisation, MX, DNSSEC and STARTTLS checks."""

from __future__ import annotations

import re
import smtplib
import subprocess
from dataclasses import asdict, dataclass
from typing import Any

import dns.exception
import dns.resolver

from .config import Config, default_config

MAX_EMAIL_LENGTH = 254
SMTP_PORT = 25

_EMAIL_RE = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

_GMAIL_DOMAINS = frozenset({"gmail.com", "googlemail.com"})


@dataclass
class ValidationResult:
    """Outcome of validating one address."""

    valid: bool = False
    reason: str = ""
    normalized_email: str = ""
    domain: str = ""
    has_mx_record: bool = False
    has_dnssec: bool = False
    primary_mx_server: str = ""
    supports_starttls: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the result as a JSON-ready mapping."""
        return asdict(self)


class EmailChecker:
    """Validates e-mail addresses against format and mail-security checks."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config if config is not None else default_config()

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(message)

    def validate_email(self, email: str) -> ValidationResult:
        """Run every check in turn, stopping at the first failure."""
        result = ValidationResult()

        if not self.is_valid_email_format(email):
            result.reason = "Invalid email format"
            result.normalized_email = email
            return result

        result.normalized_email = self.normalize_email(email)
        result.domain = self.extract_domain(result.normalized_email)

        result.has_mx_record = self.has_mx_record(result.domain)
        if not result.has_mx_record:
            result.reason = "Domain doesn't have MX record"
            return result

        result.has_dnssec = self.has_dnssec(result.domain)
        if not result.has_dnssec:
            result.reason = "Domain doesn't support DNSSEC"
            return result

        result.primary_mx_server = self.get_primary_mx_server(result.domain)
        if not result.primary_mx_server:
            result.reason = "Failed to get MX server"
            return result

        result.supports_starttls = self.smtp_supports_starttls(result.primary_mx_server)
        if not result.supports_starttls:
            result.reason = "SMTP server doesn't support STARTTLS"
            return result

        result.valid = True
        result.reason = "Email is valid and domain supports secure mail delivery"
        return result

    def is_valid_email_format(self, email: str) -> bool:
        """Check the address against a simplified RFC 5322 pattern."""
        return _EMAIL_RE.fullmatch(email) is not None and len(email) <= MAX_EMAIL_LENGTH

    def normalize_email(self, email: str) -> str:
        """Lower-case the address and fold Gmail dots, aliases and domains."""
        email = email.strip().lower()
        parts = email.split("@")
        if len(parts) != 2:
            return email

        local, domain = parts
        if domain in _GMAIL_DOMAINS:
            local = local.replace(".", "").split("+", 1)[0]
            domain = "gmail.com"
        return f"{local}@{domain}"

    def extract_domain(self, email: str) -> str:
        """Return the lower-cased domain part, or "" if there is not exactly one '@'."""
        parts = email.split("@")
        if len(parts) != 2:
            return ""
        return parts[1].strip().lower()

    def _lookup_mx(self, domain: str) -> list[Any]:
        return list(dns.resolver.resolve(domain, "MX"))

    def has_mx_record(self, domain: str) -> bool:
        """Return whether the domain publishes at least one MX record."""
        try:
            records = self._lookup_mx(domain)
        except dns.exception.DNSException as err:
            self._log(f"MX lookup failed for {domain}: {err}")
            return False
        return len(records) > 0

    def has_dnssec(self, domain: str) -> bool:
        """Ask dig for the signed SOA record and look for an RRSIG."""
        try:
            completed = subprocess.run(
                ["dig", "+dnssec", "+short", "SOA", domain],
                capture_output=True,
                text=True,
                check=True,
            )
        except (subprocess.CalledProcessError, OSError) as err:
            self._log(f"DNSSEC check failed for {domain}: {err}")
            return False
        return "RRSIG" in (completed.stdout or "").upper()

    def get_primary_mx_server(self, domain: str) -> str:
        """Return the host of the most preferred MX record, without trailing dot."""
        try:
            records = self._lookup_mx(domain)
        except dns.exception.DNSException as err:
            self._log(f"Failed to get MX records for {domain}: {err}")
            return ""
        if not records:
            self._log(f"Failed to get MX records for {domain}: no records")
            return ""

        primary = min(records, key=lambda record: record.preference)
        host = str(primary.exchange)
        return host[:-1] if host.endswith(".") else host

    def smtp_supports_starttls(self, mx_server: str) -> bool:
        """Connect to port 25 of the server and check for the STARTTLS extension."""
        timeout = self.config.timeout if self.config.timeout > 0 else None
        try:
            client = smtplib.SMTP(
                mx_server, SMTP_PORT, local_hostname="localhost", timeout=timeout
            )
        except (smtplib.SMTPException, OSError) as err:
            self._log(f"Failed to connect to SMTP server {mx_server}: {err}")
            return False

        try:
            client.ehlo_or_helo_if_needed()
            return bool(client.has_extn("starttls"))
        except (smtplib.SMTPException, OSError) as err:
            self._log(f"Failed to create SMTP client for {mx_server}: {err}")
            return False
        finally:
            try:
                client.quit()
            except (smtplib.SMTPException, OSError):
                client.close()