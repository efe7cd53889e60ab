"""Generate access tokens for a GitHub App installation.

Public API:
    create_app_jwt(app_id, private_key) -> AppAssertion
    get_installation_token(api_url, installation_id, app_id, assertion) -> (IssuedToken, dict)
    materialize(issued, response, github_url, targets, home=...) -> None
"""

from github_app_token.github.auth import create_app_jwt
from github_app_token.github.client import get_installation_token
from github_app_token.output.materializer import materialize

__version__ = "0.1.0"

__all__ = ["create_app_jwt", "get_installation_token", "materialize"]
