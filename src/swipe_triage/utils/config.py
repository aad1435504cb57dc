"""Configuration management using Pydantic Settings."""

from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Google OAuth2 Configuration
    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    google_redirect_uri: str = "http://localhost:3001/auth/google/callback"

    # Gateway Configuration
    host: str = "127.0.0.1"
    port: int = 3001
    client_url: str = "http://localhost:5173"
    session_cookie_name: str = "swipe_triage_session"
    session_ttl: float = 86400.0
    login_state_ttl: float = 600.0

    # Gmail Labels
    review_label_name: str = "Review"
    flagged_label_name: str = "Flagged"

    # Client Settings
    api_base_url: str = "http://localhost:3001"
    request_timeout: float = 30.0
    swipe_threshold: int = 100
    advance_delay: float = 0.3
    toast_duration: float = 3.0
    body_preview_length: int = 500

    # Application Settings
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
