# secure-email-validator

Checks whether an e-mail address is well formed and whether its domain is set up
for secure mail delivery. Validation stops at the first check that fails, and the
result records which check it was:

1. The address matches a simplified RFC 5322 pattern and is at most 254 characters.
2. The address is normalized: surrounding whitespace is stripped and it is
   lower-cased. For `gmail.com` and `googlemail.com`, dots and anything from the
   first `+` are removed from the local part and the domain becomes `gmail.com`.
3. The domain has at least one MX record (looked up with dnspython).
4. The domain is DNSSEC-signed: `RRSIG` must appear in the output of
   `dig +dnssec +short SOA <domain>`, so the `dig` program must be installed.
5. The MX host with the lowest preference accepts a connection on port 25.
6. That host advertises the `STARTTLS` extension in its EHLO reply.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Command line

Validate a single address:

```
secure-email-validator -email someone@example.com
secure-email-validator -email someone@example.com -verbose
secure-email-validator -email someone@example.com -json -timeout 5
```

The command exits with status 0 when the address is valid and 1 when it is
invalid or when no address was given.

| Option           | Meaning                                              |
|------------------|------------------------------------------------------|
| `-email string`  | Address to validate (required in CLI mode)           |
| `-verbose`       | Print detailed information and lookup diagnostics    |
| `-timeout int`   | SMTP connection timeout in seconds (default 10)      |
| `-json`          | Print the result as indented JSON                    |
| `-server`        | Run as an HTTP server                                |
| `-port string`   | Server port (default 8587)                           |
| `-help`, `-h`    | Show help                                            |

Each option may also be written with two dashes (`--email`, `--json`, ...).
A timeout of 0 or less means the SMTP connection waits without a time limit.

## HTTP server

```
secure-email-validator -server -port 8587
```

The server runs until interrupted. Endpoints (GET only):

- `/validate?email=someone@example.com&timeout=10&verbose=true` returns the
  validation result as JSON with `Access-Control-Allow-Origin: *`. Without an
  `email` parameter it answers 400. A `timeout` that is not an integer is
  ignored and the default of 10 is used.
- `/health` returns `{"service":"secure-email-validator","status":"healthy"}`.

Any other path answers 404.

## Library use

```python
from secure_email_validator.checker import EmailChecker
from secure_email_validator.config import Config

checker = EmailChecker(Config(timeout=5, verbose=False))
result = checker.validate_email("someone@example.com")
print(result.valid, result.reason)
print(result.to_dict())
```

`EmailChecker()` with no argument uses `default_config()` (timeout 10, not
verbose). The individual checks are available as methods:
`is_valid_email_format`, `normalize_email`, `extract_domain`, `has_mx_record`,
`has_dnssec`, `get_primary_mx_server` and `smtp_supports_starttls`. None of them
raise on lookup or connection failures; they return `False` or `""` instead.

The fields of `ValidationResult` are `valid`, `reason`, `normalized_email`,
`domain`, `has_mx_record`, `has_dnssec`, `primary_mx_server` and
`supports_starttls`.

`secure_email_validator.cli` also offers `format_result(result, original_email,
verbose)`, which renders a result as the text the command prints, and
`help_text()`.

`secure_email_validator.utils` holds small helpers: `get_version()`,
`get_build_info()` (Python version and platform) and `is_valid_domain(domain)`,
which checks that a domain is non-empty, at most 253 characters long and does
not start or end with a dot.

## Limits

The checker does not verify that a mailbox exists and never sends mail; it only
inspects DNS and the SMTP greeting. The DNSSEC check depends on the external
`dig` program and reports `False` when it is missing.