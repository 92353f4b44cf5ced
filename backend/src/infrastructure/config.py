"""
Session orchestrator configuration using Pydantic Settings.
Every section can be overridden from the environment or a .env file.
"""

from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env before any BaseSettings subclass reads env vars
load_dotenv()


class FirebaseSettings(BaseSettings):
    enabled: bool = False
    credentials_path: str = ""
    project_id: str = ""
    api_key: str = ""
    auth_domain: str = ""
    identity_toolkit_url: str = "https://identitytoolkit.googleapis.com/v1"
    request_timeout: float = 10.0

    model_config = {"env_prefix": "FIREBASE_"}


class GoogleOAuthSettings(BaseSettings):
    client_id: str = ""
    client_secret: str = ""
    consent_timeout: int = 120
    redirect_port: int = 0
    open_browser: bool = True

    model_config = {"env_prefix": "GOOGLE_OAUTH_"}


class SessionSettings(BaseSettings):
    profile_collection: str = "users"
    placeholder_name: str = "User"
    federated_provider: str = "google.com"

    model_config = {"env_prefix": "SESSION_"}


class WebSettings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 8000
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])


class LoggingSettings(BaseSettings):
    level: str = "INFO"

    model_config = {"env_prefix": "LOG_"}


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    app_env: str = "development"

    # Identity & profiles
    firebase: FirebaseSettings = Field(default_factory=FirebaseSettings)
    google_oauth: GoogleOAuthSettings = Field(default_factory=GoogleOAuthSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)

    # Web server
    web: WebSettings = Field(default_factory=WebSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def validate_production(self) -> None:
        """Validate critical settings for production environment."""
        if self.app_env != "production":
            return
        if not self.firebase.enabled:
            raise RuntimeError(
                "FATAL: Firebase must be enabled in production. "
                "Set FIREBASE_ENABLED=true."
            )
        if not self.firebase.api_key:
            raise RuntimeError(
                "FATAL: Firebase API key is missing. "
                "Set the FIREBASE_API_KEY environment variable."
            )
