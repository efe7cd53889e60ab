"""Types for the output module."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

# `--git-config` with no value, meaning the operator's home directory
HOME_SENTINEL = "~"

GITCONFIG_FILENAME = ".gitconfig"
GIT_CREDENTIALS_FILENAME = ".git-credentials"


class PrintStyle(str, Enum):
    """What to print on stdout."""

    # Just the token string
    TOKEN = "token"
    # The entire JSON response from the access_tokens request
    RESPONSE = "response"


@dataclass(frozen=True)
class OutputTargets:
    """Where the issued token should go.

    Every target is optional and independent. `force` applies to every
    file the run writes.
    """

    print_style: Optional[PrintStyle] = None
    write_to: Optional[Path] = None
    git_config: Optional[str] = None
    force: bool = False

    @property
    def is_empty(self) -> bool:
        return self.print_style is None and self.write_to is None and self.git_config is None
