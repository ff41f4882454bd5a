"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .domain.exceptions import ConfigurationError


class MatchingConfig(BaseModel):
    """Result sizes for the matcher."""
    slots_per_employee: int = 3
    best_availability_size: int = 3

    @field_validator("slots_per_employee", "best_availability_size")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Ensure result sizes are positive."""
        if value <= 0:
            raise ValueError(f"Result size must be greater than zero, got {value}")
        return value


class ServerConfig(BaseModel):
    """HTTP server and CORS settings."""
    host: str = "127.0.0.1"
    port: int = 3000
    allow_origin: str = "*"
    allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "OPTIONS"])
    allow_headers: List[str] = Field(default_factory=lambda: ["Content-Type"])

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        """Validate port is a usable TCP port."""
        if not 1 <= value <= 65535:
            raise ValueError(f"Port must be between 1 and 65535, got {value}")
        return value

    @field_validator("allow_methods")
    @classmethod
    def normalize_methods(cls, value: List[str]) -> List[str]:
        """Upper-case HTTP methods."""
        return [method.upper() for method in value]

    def cors_headers(self) -> dict[str, str]:
        """Headers emitted with every response."""
        return {
            "Access-Control-Allow-Origin": self.allow_origin,
            "Access-Control-Allow-Methods": ", ".join(self.allow_methods),
            "Access-Control-Allow-Headers": ", ".join(self.allow_headers),
        }


class AppConfig(BaseModel):
    """Application configuration."""
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping at the root level.")

        try:
            return cls(**data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {exc}") from exc

    @classmethod
    def load_or_default(cls, config_path: Path | None = None) -> "AppConfig":
        """
        Load an explicit config file, or the default one if it exists.

        An explicitly given path must exist; a missing default file simply
        yields the built-in defaults.
        """
        if config_path is not None:
            return cls.load_from_yaml(config_path)

        default_path = get_default_config_path()
        if default_path.exists():
            return cls.load_from_yaml(default_path)

        return cls()


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
