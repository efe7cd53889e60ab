from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GITHUB_URL = "https://github.com"
DEFAULT_GITHUB_API_URL = "https://api.github.com"

# Seconds before the token request is abandoned
API_TIMEOUT = 30.0


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    These are the environment-sourced defaults for the command line. The
    command line always wins over the environment.

    App ID, private key and installation ID each come either as a literal
    value or as a path to a file holding the value — never both. The
    defaults for the file variants live in the CLI so an unset variable
    can be told apart from a default.

    HOME is read here (not ad hoc in the output code) so the Git config
    writer receives it as plain configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub App credentials — literal value or file path.
    github_app_id: Optional[str] = None
    github_app_id_file: Optional[str] = None
    github_app_private_key: Optional[str] = None
    github_app_private_key_file: Optional[str] = None
    github_app_installation_id: Optional[str] = None
    github_app_installation_id_file: Optional[str] = None

    # Used for writing Git basic auth config files.
    github_url: str = DEFAULT_GITHUB_URL
    # Used for requesting the access token.
    github_api_url: str = DEFAULT_GITHUB_API_URL

    http_timeout: float = API_TIMEOUT

    home: Optional[str] = None

    debug: bool = False

    @field_validator(
        "github_app_id",
        "github_app_id_file",
        "github_app_private_key",
        "github_app_private_key_file",
        "github_app_installation_id",
        "github_app_installation_id_file",
        "home",
        mode="before",
    )
    @classmethod
    def blank_as_unset(cls, v: Optional[str]) -> Optional[str]:
        # `export GITHUB_APP_ID=` should behave like an unset variable
        if isinstance(v, str) and not v.strip():
            return None
        return v


def get_settings() -> Settings:
    return Settings()
