import smtplib
import subprocess
from types import SimpleNamespace
from unittest import mock

import dns.name
import dns.resolver
import pytest

from secure_email_validator.checker import EmailChecker, ValidationResult
from secure_email_validator.config import Config, default_config


def _mx(preference, host):
    return SimpleNamespace(preference=preference, exchange=dns.name.from_text(host))


def _dig_output(text):
    return subprocess.CompletedProcess(args=["dig"], returncode=0, stdout=text, stderr="")


@pytest.fixture
def checker():
    return EmailChecker(default_config())


@pytest.mark.parametrize(
    "email, want",
    [
        ("test@example.com", True),
        ("user.name@example.com", True),
        ("user+tag@example.org", True),
        ("invalid-email", False),
        ("@example.com", False),
        ("test@", False),
        ("", False),
        ("test@.com", False),
        ("test@com.", False),
    ],
)
def test_is_valid_email_format(checker, email, want):
    assert checker.is_valid_email_format(email) is want


def test_is_valid_email_format_rejects_trailing_newline(checker):
    assert checker.is_valid_email_format("test@example.com\n") is False


def test_is_valid_email_format_length_limit(checker):
    domain = ".".join(["a" * 60] * 4) + ".com"
    short = "x@" + domain
    assert checker.is_valid_email_format(short) is (len(short) <= 254)
    long_local = "x" * (255 - len(domain) - 1) + "@" + domain
    assert len(long_local) == 255
    assert checker.is_valid_email_format(long_local) is False


@pytest.mark.parametrize(
    "given, want",
    [
        ("test@example.com", "test@example.com"),
        ("Test@Example.Com", "test@example.com"),
        ("  Test.User+Tag@Example.com  ", "test.user+tag@example.com"),
        ("no-at-sign", "no-at-sign"),
    ],
)
def test_normalize_email(checker, given, want):
    assert checker.normalize_email(given) == want


@pytest.mark.parametrize("domain", ["gmail.com", "googlemail.com", "GoogleMail.COM"])
def test_normalize_email_folds_gmail_addresses(checker, domain):
    address = "Test.User+tag" + "@" + domain
    assert checker.normalize_email(address) == "testuser" + "@" + "gmail.com"


def test_normalize_email_is_idempotent(checker):
    once = checker.normalize_email("A.B+c" + "@" + "googlemail.com")
    assert checker.normalize_email(once) == once


@pytest.mark.parametrize(
    "email, want",
    [
        ("test@example.com", "example.com"),
        ("user@Example.COM ", "example.com"),
        ("invalid-email", ""),
        ("@example.com", "example.com"),
        ("test@", ""),
    ],
)
def test_extract_domain(checker, email, want):
    assert checker.extract_domain(email) == want


def test_constructor_without_config_uses_defaults():
    assert EmailChecker(None).config == Config()


def test_validation_result_to_dict_keys():
    result = ValidationResult(valid=True, reason="ok", domain="example.com")
    data = result.to_dict()
    assert list(data) == [
        "valid",
        "reason",
        "normalized_email",
        "domain",
        "has_mx_record",
        "has_dnssec",
        "primary_mx_server",
        "supports_starttls",
    ]
    assert data["domain"] == "example.com"
    assert data["valid"] is True


def test_validate_email_bad_format(checker):
    result = checker.validate_email("not an email")
    assert result.valid is False
    assert result.reason == "Invalid email format"
    assert result.normalized_email == "not an email"
    assert result.domain == ""


@mock.patch("dns.resolver.resolve", side_effect=dns.resolver.NXDOMAIN())
def test_validate_email_without_mx(resolve, checker):
    result = checker.validate_email("Test@Example.com")
    assert result.reason == "Domain doesn't have MX record"
    assert result.normalized_email == "test@example.com"
    assert result.domain == "example.com"
    assert result.has_mx_record is False
    resolve.assert_called_once_with("example.com", "MX")


@mock.patch("subprocess.run", return_value=_dig_output("ns.example.com. 1 2 3 4 5\n"))
@mock.patch("dns.resolver.resolve", return_value=[_mx(10, "mx.example.com.")])
def test_validate_email_without_dnssec(resolve, run, checker):
    result = checker.validate_email("test@example.com")
    assert result.has_mx_record is True
    assert result.has_dnssec is False
    assert result.reason == "Domain doesn't support DNSSEC"


@mock.patch("smtplib.SMTP")
@mock.patch("subprocess.run", return_value=_dig_output("SOA 8 2 rrsig data\n"))
@mock.patch(
    "dns.resolver.resolve",
    return_value=[_mx(20, "mx2.example.com."), _mx(10, "mx1.example.com.")],
)
def test_validate_email_success(resolve, run, smtp, checker):
    smtp.return_value.has_extn.return_value = True
    result = checker.validate_email("test@example.com")
    assert result.valid is True
    assert result.reason == "Email is valid and domain supports secure mail delivery"
    assert result.primary_mx_server == "mx1.example.com"
    assert result.supports_starttls is True
    assert smtp.call_args.args == ("mx1.example.com", 25)
    run.assert_called_once()
    assert run.call_args.args[0] == ["dig", "+dnssec", "+short", "SOA", "example.com"]


@mock.patch("smtplib.SMTP")
@mock.patch("subprocess.run", return_value=_dig_output("RRSIG\n"))
@mock.patch("dns.resolver.resolve", return_value=[_mx(10, "mx.example.com.")])
def test_validate_email_without_starttls(resolve, run, smtp, checker):
    smtp.return_value.has_extn.return_value = False
    result = checker.validate_email("test@example.com")
    assert result.valid is False
    assert result.reason == "SMTP server doesn't support STARTTLS"
    smtp.return_value.quit.assert_called_once()


@mock.patch("dns.resolver.resolve", return_value=[])
def test_has_mx_record_empty_answer(resolve, checker):
    assert checker.has_mx_record("example.com") is False


@mock.patch("dns.resolver.resolve", return_value=[])
def test_get_primary_mx_server_empty(resolve, checker):
    assert checker.get_primary_mx_server("example.com") == ""


@mock.patch(
    "dns.resolver.resolve",
    return_value=[_mx(5, "first.example.com."), _mx(5, "second.example.com.")],
)
def test_get_primary_mx_server_tie_keeps_first(resolve, checker):
    assert checker.get_primary_mx_server("example.com") == "first.example.com"


@mock.patch("subprocess.run", side_effect=FileNotFoundError("dig"))
def test_has_dnssec_missing_tool_verbose(run, capsys):
    verbose_checker = EmailChecker(Config(verbose=True))
    assert verbose_checker.has_dnssec("example.com") is False
    assert "DNSSEC check failed for example.com" in capsys.readouterr().out


@mock.patch(
    "subprocess.run",
    side_effect=subprocess.CalledProcessError(9, ["dig"]),
)
def test_has_dnssec_command_failure(run, checker):
    assert checker.has_dnssec("example.com") is False


@mock.patch("smtplib.SMTP", side_effect=OSError("refused"))
def test_smtp_connection_failure_verbose(smtp, capsys):
    verbose_checker = EmailChecker(Config(timeout=1, verbose=True))
    assert verbose_checker.smtp_supports_starttls("mx.example.com") is False
    assert "Failed to connect to SMTP server mx.example.com" in capsys.readouterr().out


@mock.patch("smtplib.SMTP")
def test_smtp_helo_failure(smtp, checker):
    smtp.return_value.ehlo_or_helo_if_needed.side_effect = smtplib.SMTPHeloError(
        500, b"no"
    )
    assert checker.smtp_supports_starttls("mx.example.com") is False


@mock.patch("smtplib.SMTP")
def test_smtp_zero_timeout_means_blocking(smtp):
    smtp.return_value.has_extn.return_value = True
    assert EmailChecker(Config(timeout=0)).smtp_supports_starttls("mx.example.com")
    assert smtp.call_args.kwargs["timeout"] is None