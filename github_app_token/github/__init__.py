"""GitHub App authentication: JWT signing and installation token exchange."""
