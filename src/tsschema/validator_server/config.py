"""Configuration management for validator server."""

import os
from dataclasses import dataclass


@dataclass
class ValidatorServerConfig:
    """Configuration class for the validator server."""

    # File discovery
    project_root: str = "."  # Relative glob patterns are resolved against this
    max_file_size_mb: int = 5

    # Output naming
    validator_name_suffix: str = ""  # Appended to declaration names in result maps

    # MCP Server Configuration
    server_name: str = "tsschema-validators"

    # Runtime Configuration
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "ValidatorServerConfig":
        """Create configuration from environment variables."""
        return cls(
            project_root=os.getenv("MCP_FILE_ROOT", "."),
            max_file_size_mb=int(os.getenv("MAX_FILE_SIZE_MB", "5")),
            validator_name_suffix=os.getenv("VALIDATOR_NAME_SUFFIX", ""),
            server_name=os.getenv("VALIDATOR_SERVER_NAME", "tsschema-validators"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """Validate configuration settings."""
        errors = []

        if self.max_file_size_mb <= 0:
            errors.append("max_file_size_mb must be positive")

        if not self.project_root:
            errors.append("project_root cannot be empty")

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level not in valid_log_levels:
            errors.append(f"log_level must be one of {valid_log_levels}")

        return len(errors) == 0, errors

    def __post_init__(self):
        """Post-initialization validation."""
        is_valid, errors = self.validate()
        if not is_valid:
            raise ValueError(f"Invalid configuration: {', '.join(errors)}")


# Global configuration instance
_config: ValidatorServerConfig | None = None


def get_config() -> ValidatorServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ValidatorServerConfig.from_environment()
    return _config


def set_config(config: ValidatorServerConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config
    _config = None
