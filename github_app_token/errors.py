"""Error types for the token pipeline.

Every failure is fatal to the run. Each error records the pipeline stage it
came from so the CLI can tell the operator where things went wrong:

    input    — resolving App ID / key / installation ID
    sign     — building the App JWT
    exchange — talking to the GitHub API
    output   — writing files or printing

Messages must never contain the private key or the issued token.
"""

from pathlib import Path
from typing import Any, Optional


class GitHubAppTokenError(Exception):
    """Base class for all errors surfaced to the operator."""

    stage = "run"


class ConfigurationError(GitHubAppTokenError):
    """Raised when an input value cannot be resolved."""

    stage = "input"


class KeyFormatError(GitHubAppTokenError):
    """Raised when the private key is not a usable PEM private key."""

    stage = "sign"


class TransportError(GitHubAppTokenError):
    """Raised on network failures: DNS, TLS, connection reset, timeout."""

    stage = "exchange"

    def __init__(self, url: str, cause: Exception):
        self.url = url
        self.cause = cause
        super().__init__(f"Request to {url} failed: {cause.__class__.__name__}: {cause}")


class ExchangeError(GitHubAppTokenError):
    """Raised when GitHub answers the token request with a non-2xx status.

    Carries the status code and the error body (parsed JSON when possible).
    """

    stage = "exchange"

    def __init__(self, status_code: int, body: Any):
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"GitHub rejected the access token request (HTTP {status_code}): {body}"
        )


class MissingFieldError(GitHubAppTokenError):
    """Raised when a successful response has no usable 'token' field.

    The full raw body is kept so an API shape change can be diagnosed.
    """

    stage = "exchange"

    def __init__(self, body: str, field: str = "token"):
        self.body = body
        self.field = field
        super().__init__(f"Response from GitHub is missing the '{field}' field: {body}")


class WouldOverwriteError(GitHubAppTokenError):
    """Raised when a destination file exists and --force was not given."""

    stage = "output"

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Refusing to overwrite existing {path} (use --force)")


class NoHomeDirectoryError(GitHubAppTokenError):
    """Raised when '~' was requested but no home directory is known."""

    stage = "output"

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message or "No path specified for Git config and no home directory is set (HOME)."
        )


class InvalidUrlError(GitHubAppTokenError):
    """Raised when the GitHub URL cannot carry embedded credentials."""

    stage = "output"

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Given GitHub URL is invalid: {url} ({reason})")
