"""Command line and HTTP front ends for the e-mail validator."""

from __future__ import annotations

import argparse
import json
import re
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, urlsplit

from .checker import EmailChecker, ValidationResult
from .config import DEFAULT_TIMEOUT, Config

DEFAULT_PORT = "8587"
SERVICE_NAME = "secure-email-validator"

_INT_RE = re.compile(r"[+-]?[0-9]+")

Response = tuple[int, dict[str, str], str]


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


def _text_error(message: str, status: int) -> Response:
    headers = {
        "Content-Type": "text/plain; charset=utf-8",
        "X-Content-Type-Options": "nosniff",
    }
    return status, headers, message + "\n"


def format_result(result: ValidationResult, original_email: str, verbose: bool) -> str:
    """Render a validation result as human-readable text."""
    lines = []
    if result.valid:
        lines.append(f"✅ Email '{original_email}' is valid and secure")
    else:
        lines.append(f"❌ Email '{original_email}' is invalid")
    if result.normalized_email != original_email:
        lines.append(f"📧 Normalized: {result.normalized_email}")
    if result.valid:
        lines.append(f"✨ Reason: {result.reason}")
    else:
        lines.append(f"⚠️  Reason: {result.reason}")

    if verbose:
        lines += [
            "",
            "--- Detailed Information ---",
            f"Domain: {result.domain}",
            f"Has MX Record: {_bool_text(result.has_mx_record)}",
            f"Has DNSSEC: {_bool_text(result.has_dnssec)}",
            f"Primary MX Server: {result.primary_mx_server}",
            f"Supports STARTTLS: {_bool_text(result.supports_starttls)}",
        ]
    return "\n".join(lines)


def help_text() -> str:
    """Return the usage message."""
    return "\n".join(
        [
            "Secure Email Validator",
            "A professional tool for email security validation",
            "Usage: secure-email-validator [options]",
            "",
            "Modes:",
            "  CLI Mode (default): Validate single email",
            "  Server Mode: Run as HTTP API server",
            "",
            "CLI Options:",
            "  -email string     Email address to validate (required for CLI mode)",
            "  -verbose         Enable verbose output",
            "  -timeout int     SMTP connection timeout in seconds (default 10)",
            "  -json           Output result in JSON format",
            "  -help           Show this help message",
            "",
            "Server Options:",
            "  -server         Run as HTTP server",
            "  -port string    Server port (default 8587)",
            "",
            "Examples:",
            "  # CLI mode",
            "  secure-email-validator -email user@example.com -verbose",
            "  secure-email-validator -email test@example.com -json",
            "",
            "  # Server mode",
            "  secure-email-validator -server -port 3000",
            "  curl 'http://localhost:8587/validate?email=user@example.com&verbose=true'",
        ]
    )


def validation_response(query: str) -> Response:
    """Handle a /validate query string; return status, headers and body."""
    params = parse_qs(query, keep_blank_values=True)

    def first(name: str) -> str:
        values = params.get(name)
        return values[0] if values else ""

    email = first("email")
    if not email:
        return _text_error('{"error": "Email parameter required"}', 400)

    timeout = DEFAULT_TIMEOUT
    timeout_text = first("timeout")
    if _INT_RE.fullmatch(timeout_text):
        timeout = int(timeout_text)

    cfg = Config(timeout=timeout, verbose=first("verbose") == "true")
    result = EmailChecker(cfg).validate_email(email)

    headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    body = json.dumps(result.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return 200, headers, body + "\n"


def health_response() -> Response:
    """Return the /health status, headers and body."""
    body = json.dumps(
        {"status": "healthy", "service": SERVICE_NAME},
        separators=(",", ":"),
        sort_keys=True,
    )
    return 200, {"Content-Type": "application/json"}, body + "\n"


class RequestHandler(BaseHTTPRequestHandler):
    """Serves the /validate and /health endpoints."""

    def do_GET(self) -> None:
        url = urlsplit(self.path)
        if url.path == "/validate":
            status, headers, body = validation_response(url.query)
        elif url.path == "/health":
            status, headers, body = health_response()
        else:
            status, headers, body = _text_error("404 page not found", 404)

        payload = body.encode("utf-8")
        self.send_response(status)
        for name, value in headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):  # noqa: A002
        return


def start_server(port: str) -> None:
    """Serve the HTTP API on the given port until interrupted."""
    print(f"🚀 Secure Email Validator Server starting on port {port}")
    print(
        f"📍 Validation endpoint: http://localhost:{port}/validate?email=test@example.com"
    )
    print(f"💚 Health check: http://localhost:{port}/health")

    server = ThreadingHTTPServer(("", int(port)), RequestHandler)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="secure-email-validator", add_help=False, allow_abbrev=False
    )
    parser.add_argument("-email", "--email", default="")
    parser.add_argument("-verbose", "--verbose", action="store_true")
    parser.add_argument("-timeout", "--timeout", type=int, default=DEFAULT_TIMEOUT)
    parser.add_argument("-json", "--json", dest="json_output", action="store_true")
    parser.add_argument("-server", "--server", action="store_true")
    parser.add_argument("-port", "--port", default=DEFAULT_PORT)
    parser.add_argument("-help", "--help", "-h", dest="show_help", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line tool; return the process exit status."""
    args = _parser().parse_args(argv)

    if args.show_help:
        print(help_text())
        return 0

    if args.server:
        try:
            start_server(args.port)
        except (OSError, ValueError) as err:
            print(f"Server failed to start: {err}")
            return 1
        return 0

    if not args.email:
        print("Error: Email address is required")
        print(help_text())
        return 1

    cfg = Config(timeout=args.timeout, verbose=args.verbose)
    result = EmailChecker(cfg).validate_email(args.email)

    if args.json_output:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_result(result, args.email, args.verbose))

    return 0 if result.valid else 1