"""Output targets for an issued installation token.

Public API:
    materialize(issued, response, github_url, targets, home=...) -> None
    write_file(path, content, force=False) -> None
"""

from github_app_token.output.materializer import materialize
from github_app_token.output.types import OutputTargets, PrintStyle
from github_app_token.output.writer import write_file

__all__ = ["materialize", "write_file", "OutputTargets", "PrintStyle"]
