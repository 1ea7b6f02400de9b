"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _data_dir() -> str:
    return os.getenv("DATA_DIR", "./data")


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", ""))

    # CORS (empty means every origin, as the public form is embedded anywhere)
    allowed_origins: list = field(
        default_factory=lambda: [
            o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()
        ]
    )

    # Data
    data_dir: str = field(default_factory=_data_dir)
    upload_dir: str = field(
        default_factory=lambda: os.getenv("UPLOAD_DIR", str(Path(_data_dir()) / "UploadedFiles"))
    )
    upload_url_prefix: str = field(
        default_factory=lambda: os.getenv("UPLOAD_URL_PREFIX", "/UploadedFiles")
    )
    submissions_path: str = field(
        default_factory=lambda: os.getenv(
            "SUBMISSIONS_PATH", str(Path(_data_dir()) / "submissions.json")
        )
    )

    # Errors
    redact_server_errors: bool = field(default_factory=lambda: _env_bool("REDACT_SERVER_ERRORS"))

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    @property
    def cors_origins(self) -> list:
        """Origins handed to the CORS middleware."""
        return self.allowed_origins or ["*"]

    @property
    def effective_log_level(self) -> str:
        """Explicit LOG_LEVEL, else DEBUG in debug mode, else INFO."""
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.debug else "INFO"

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.effective_log_level,
            "allowed_origins": self.cors_origins,
            "data_dir": self.data_dir,
            "upload_dir": self.upload_dir,
            "upload_url_prefix": self.upload_url_prefix,
            "submissions_path": self.submissions_path,
            "redact_server_errors": self.redact_server_errors,
        }
