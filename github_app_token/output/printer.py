import json
import sys
from typing import Optional, TextIO

from github_app_token.github.types import IssuedToken
from github_app_token.output.types import PrintStyle


def render(style: PrintStyle, issued: IssuedToken, response: dict) -> str:
    if style is PrintStyle.RESPONSE:
        return json.dumps(response, indent=2)
    return issued.token


def print_token(
    style: PrintStyle,
    issued: IssuedToken,
    response: dict,
    stream: Optional[TextIO] = None,
) -> None:
    """Print the token, or the whole pretty-printed response, to stdout."""
    print(render(style, issued, response), file=stream or sys.stdout)
