"""Structured logging via structlog.

Configured once by the CLI before the pipeline runs. Package modules log
through `structlog.get_logger(__name__)`; third-party libraries (httpx)
log through stdlib `logging`, which is pointed at the same stream.

Output stream:
  Logs always go to stderr. Stdout is reserved for the token or the
  response when --print is used, so it must stay machine-readable.

Renderer selection:
  stderr is a TTY — `ConsoleRenderer` with colours.
  otherwise        — `JSONRenderer` for CI logs.

Secrets:
  `redact_secrets` masks any event field whose key looks sensitive
  (token, private_key, jwt, ...). No code path logs a secret on purpose;
  this catches accidents.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional, TextIO

import structlog

_SENSITIVE_KEYS = ("token", "private_key", "secret", "password", "jwt", "authorization")

REDACTED = "[REDACTED]"


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(word in lowered for word in _SENSITIVE_KEYS)


def redact_secrets(
    logger: logging.Logger,
    method: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor: replace values of sensitive keys with a marker."""
    for key in list(event_dict):
        if key == "event":
            continue
        if _is_sensitive(key):
            event_dict[key] = REDACTED
    return event_dict


def configure_structlog(verbose: bool = False, stream: Optional[TextIO] = None) -> None:
    """Configure structlog for the process lifetime.

    Calling multiple times is safe — the last call wins.
    """
    stream = stream or sys.stderr
    level = logging.INFO if verbose else logging.WARNING

    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if stream.isatty():
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )

    # httpx logs every request at INFO; keep that behind --verbose too.
    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        stream=stream,
        level=level,
        force=True,
    )
