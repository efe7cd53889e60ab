"""Deliver an issued token to the requested output targets.

Order of work:
1. Plan — resolve the Git config directory and build the credential URL.
   Nothing is written yet, so NoHomeDirectoryError and InvalidUrlError
   leave the filesystem untouched.
2. --write-to file
3. --git-config directory (.gitconfig, then .git-credentials)
4. --print to stdout, last, so a failed write never prints a token

Targets are not transactional: if step 3 fails, the file from step 2
stays on disk and the error still fails the run.
"""

from typing import Optional, TextIO

import structlog

from github_app_token.github.types import IssuedToken
from github_app_token.output.git_config import plan_git_config, write_git_config
from github_app_token.output.printer import print_token
from github_app_token.output.types import OutputTargets
from github_app_token.output.writer import write_file

logger = structlog.get_logger(__name__)


def materialize(
    issued: IssuedToken,
    response: dict,
    github_url: str,
    targets: OutputTargets,
    *,
    home: Optional[str] = None,
    stdout: Optional[TextIO] = None,
) -> None:
    """Write and/or print the token as `targets` asks.

    Args:
        issued: The token from the access_tokens exchange.
        response: Full JSON body of that exchange, for PrintStyle.RESPONSE.
        github_url: Git remote base URL, e.g. "https://github.com".
        targets: Requested outputs and the shared force flag.
        home: Directory that "~" resolves to for --git-config.
        stdout: Stream for --print; defaults to sys.stdout.

    Raises:
        NoHomeDirectoryError, InvalidUrlError: before any file is written.
        WouldOverwriteError: a destination exists and force is off.
    """
    if targets.is_empty:
        logger.warning("no_output_requested")
        return

    git_plan = None
    if targets.git_config is not None:
        git_plan = plan_git_config(targets.git_config, github_url, issued.token, home)

    if targets.write_to is not None:
        write_file(targets.write_to, issued.token, force=targets.force)

    if git_plan is not None:
        write_git_config(git_plan, force=targets.force)
        logger.info("git_config_written", directory=str(git_plan.directory), github_url=github_url)

    if targets.print_style is not None:
        print_token(targets.print_style, issued, response, stream=stdout)
