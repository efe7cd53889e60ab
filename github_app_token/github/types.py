"""Types for the GitHub App authentication flow."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class AppAssertion:
    """A signed GitHub App JWT and the claims it was built from.

    Lives for a single run and is consumed once by the token exchange.
    The signing key is not kept here.
    """

    token: str = field(repr=False)
    issuer: str
    issued_at: int
    expires_at: int

    @property
    def lifetime_seconds(self) -> int:
        return self.expires_at - self.issued_at


@dataclass(frozen=True)
class IssuedToken:
    """An installation access token returned by GitHub.

    Only `token` is guaranteed; the rest is lifted from the response
    when GitHub includes it.
    """

    token: str = field(repr=False)
    expires_at: Optional[str] = None
    permissions: dict[str, str] = field(default_factory=dict)
    repository_selection: Optional[str] = None

    @classmethod
    def from_response(cls, data: dict) -> "IssuedToken":
        permissions = data.get("permissions")
        return cls(
            token=data["token"],
            expires_at=data.get("expires_at"),
            permissions=dict(permissions) if isinstance(permissions, dict) else {},
            repository_selection=data.get("repository_selection"),
        )
