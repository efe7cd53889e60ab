"""Command line entry point.

Generate an access token for a GitHub App installation:

    github-app-token -a 12345 -K app.pem -i 67890 --print
    github-app-token --git-config --force          # values from files/env

Each of App ID, private key and installation ID can be given literally or
as a file path, from the command line or the environment (command line
wins). With no value at all, the default file in the working directory is
read: `app-id`, `private-key.pem`, `installation-id`.

Exit status: 0 on success, 1 when any stage fails, 2 on usage errors.
"""

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

import structlog

from github_app_token import __version__
from github_app_token.core.config import Settings, get_settings
from github_app_token.core.logging import configure_structlog
from github_app_token.errors import ConfigurationError, GitHubAppTokenError
from github_app_token.github.auth import create_app_jwt
from github_app_token.github.client import get_installation_token
from github_app_token.output.materializer import materialize
from github_app_token.output.types import HOME_SENTINEL, OutputTargets, PrintStyle

logger = structlog.get_logger(__name__)

DEFAULT_APP_ID_FILE = "app-id"
DEFAULT_PRIVATE_KEY_FILE = "private-key.pem"
DEFAULT_INSTALLATION_ID_FILE = "installation-id"


# ---------------------------------------------------------------------------
# Literal-or-file inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValueSource:
    """A value given either literally or as a path to a file holding it."""

    description: str
    literal: Optional[str] = field(default=None, repr=False)
    path: Optional[str] = None
    strip: bool = True

    def __post_init__(self) -> None:
        if self.literal is not None and self.path is not None:
            raise ConfigurationError(
                f"{self.description} was given both as a value and as a file; use one."
            )
        if self.literal is None and self.path is None:
            raise ConfigurationError(f"No {self.description} given.")

    def resolve(self) -> str:
        if self.literal is not None:
            value = self.literal
        else:
            try:
                value = Path(self.path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ConfigurationError(
                    f"Failed to read {self.description} from file: {self.path} ({exc.__class__.__name__})"
                ) from None
        return value.strip() if self.strip else value


def pick_source(
    description: str,
    cli_literal: Optional[str],
    cli_path: Optional[str],
    env_literal: Optional[str],
    env_path: Optional[str],
    default_path: str,
    *,
    strip: bool = True,
) -> ValueSource:
    """Choose where a value comes from: command line, then env, then default file."""
    if cli_literal is not None or cli_path is not None:
        return ValueSource(description, cli_literal, cli_path, strip)
    if env_literal is not None or env_path is not None:
        return ValueSource(description, env_literal, env_path, strip)
    return ValueSource(description, path=default_path, strip=strip)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-app-token",
        description="Generate an access token for a GitHub App installation.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    app_id = parser.add_mutually_exclusive_group()
    app_id.add_argument("-a", "--app-id", help="The GitHub App ID [env: GITHUB_APP_ID]")
    app_id.add_argument(
        "-A", "--app-id-file",
        help=f"Path to a file containing the GitHub App ID [env: GITHUB_APP_ID_FILE] "
             f"[default: {DEFAULT_APP_ID_FILE}]",
    )

    key = parser.add_mutually_exclusive_group()
    key.add_argument(
        "-k", "--private-key",
        help="The GitHub App private key, in PEM format [env: GITHUB_APP_PRIVATE_KEY]",
    )
    key.add_argument(
        "-K", "--private-key-file",
        help=f"Path to a file containing the GitHub App private key, in PEM format "
             f"[env: GITHUB_APP_PRIVATE_KEY_FILE] [default: {DEFAULT_PRIVATE_KEY_FILE}]",
    )

    installation = parser.add_mutually_exclusive_group()
    installation.add_argument(
        "-i", "--installation-id",
        help="The GitHub App installation ID [env: GITHUB_APP_INSTALLATION_ID]",
    )
    installation.add_argument(
        "-I", "--installation-id-file",
        help=f"Path to a file containing the installation ID "
             f"[env: GITHUB_APP_INSTALLATION_ID_FILE] [default: {DEFAULT_INSTALLATION_ID_FILE}]",
    )

    github = parser.add_argument_group("GitHub")
    github.add_argument(
        "--github-url",
        help="The GitHub URL, used for writing Git basic auth config files "
             "[env: GITHUB_URL] [default: https://github.com]",
    )
    github.add_argument(
        "--github-api-url",
        help="The GitHub API URL, used for requesting the access token "
             "[env: GITHUB_API_URL] [default: https://api.github.com]",
    )

    output = parser.add_argument_group("output")
    output.add_argument(
        "-p", "--print",
        dest="print_style",
        nargs="?",
        const=PrintStyle.TOKEN.value,
        choices=[s.value for s in PrintStyle],
        help="Print the outcome to standard output: the token (default) "
             "or the whole JSON response",
    )
    output.add_argument("-w", "--write-to", type=Path, help="Write the token to the given file")
    output.add_argument(
        "-c", "--git-config",
        nargs="?",
        const=HOME_SENTINEL,
        metavar="DIR",
        help="Write '.gitconfig' and '.git-credentials' to the given directory "
             "[default when no DIR: home directory]",
    )
    output.add_argument("-f", "--force", action="store_true", help="Overwrite existing files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser


@dataclass
class ParsedOpts:
    app_id: str
    private_key_source: ValueSource
    installation_id: str
    github_url: str
    github_api_url: str
    targets: OutputTargets
    home: Optional[str]
    timeout: float


def finish_parsing(args: argparse.Namespace, settings: Settings) -> ParsedOpts:
    """Resolve the App ID and installation ID; pick where the key comes from.

    The key itself is not read until `run()` signs with it.
    """
    app_id = pick_source(
        "App ID",
        args.app_id, args.app_id_file,
        settings.github_app_id, settings.github_app_id_file,
        DEFAULT_APP_ID_FILE,
    ).resolve()
    private_key_source = pick_source(
        "private key",
        args.private_key, args.private_key_file,
        settings.github_app_private_key, settings.github_app_private_key_file,
        DEFAULT_PRIVATE_KEY_FILE,
        strip=False,
    )
    installation_id = pick_source(
        "App installation ID",
        args.installation_id, args.installation_id_file,
        settings.github_app_installation_id, settings.github_app_installation_id_file,
        DEFAULT_INSTALLATION_ID_FILE,
    ).resolve()

    targets = OutputTargets(
        print_style=PrintStyle(args.print_style) if args.print_style else None,
        write_to=args.write_to,
        git_config=args.git_config,
        force=args.force,
    )

    return ParsedOpts(
        app_id=app_id,
        private_key_source=private_key_source,
        installation_id=installation_id,
        github_url=args.github_url or settings.github_url,
        github_api_url=args.github_api_url or settings.github_api_url,
        targets=targets,
        home=settings.home,
        timeout=settings.http_timeout,
    )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def run(opts: ParsedOpts) -> None:
    """Sign, exchange, materialize.

    The private key is read here and lives only for the signing call.
    """
    assertion = create_app_jwt(opts.app_id, opts.private_key_source.resolve())

    issued, response = get_installation_token(
        opts.github_api_url,
        opts.installation_id,
        opts.app_id,
        assertion,
        timeout=opts.timeout,
    )

    materialize(
        issued,
        response,
        opts.github_url,
        opts.targets,
        home=opts.home,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValueError as exc:
        print(f"error: input: invalid environment configuration: {exc}", file=sys.stderr)
        return 1

    configure_structlog(verbose=args.verbose or settings.debug)

    try:
        opts = finish_parsing(args, settings)
        run(opts)
    except GitHubAppTokenError as exc:
        logger.debug("run_failed", stage=exc.stage, error_type=exc.__class__.__name__)
        print(f"error: {exc.stage}: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: output: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
