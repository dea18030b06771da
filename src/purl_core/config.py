"""
Configuration management for purl-core.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PolicyConfig(BaseSettings):
    """Configuration for the type policy registry."""

    modules: list[str] = Field(
        default_factory=list,
        description=(
            "Importable modules exposing register_policies(registry); each is "
            "loaded once when the process-wide registry is first used"
        ),
    )

    model_config = SettingsConfigDict(env_prefix="PURL_POLICY_")


class Config(BaseSettings):
    """Main configuration."""

    # Sub-configs
    policy: PolicyConfig = Field(default_factory=PolicyConfig)

    # Global settings
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_prefix="PURL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
