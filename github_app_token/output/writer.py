"""Non-clobber file writes.

Every file this tool writes holds a secret, so new files are created
owner-read/write only. Existing files are refused unless `force` is set;
the existence check is done by the open call itself (O_EXCL), once per
file, right before that file is written.
"""

import os
from pathlib import Path
from typing import Union

import structlog

from github_app_token.errors import WouldOverwriteError

logger = structlog.get_logger(__name__)

SECRET_FILE_MODE = 0o600


def write_file(path: Union[str, Path], content: str, *, force: bool = False) -> None:
    """Write `content` to `path`, refusing to replace an existing file.

    Raises:
        WouldOverwriteError: `path` exists and `force` is False. The file
            is left exactly as it was.
    """
    p = Path(path)
    flags = os.O_WRONLY | os.O_CREAT
    flags |= os.O_TRUNC if force else os.O_EXCL

    try:
        fd = os.open(p, flags, SECRET_FILE_MODE)
    except FileExistsError:
        raise WouldOverwriteError(p) from None

    with os.fdopen(fd, "w", encoding="utf-8") as fh:
        fh.write(content)

    logger.info("wrote_file", path=str(p), overwrite_allowed=force)
