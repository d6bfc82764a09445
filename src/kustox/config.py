"""
KustoX Configuration Module.

Handles application settings, feature flags, and the virtual results address space.
Uses pydantic-settings for validation and type safety.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FeatureFlags(BaseSettings):
    """Feature flags for enabling/disabling modules."""

    model_config = SettingsConfigDict(env_prefix="FEATURE_")

    results: bool = True
    tree: bool = True

    def to_dict(self) -> dict[str, bool]:
        """Return feature flags as dictionary for health endpoint."""
        return {
            "results": self.results,
            "tree": self.tree,
        }


class ResultsSettings(BaseSettings):
    """Virtual address space for the latest query result."""

    model_config = SettingsConfigDict(env_prefix="RESULTS_")

    scheme: str = Field(default="kustox-ai", description="URI scheme registered with the host")
    authority: str = Field(default="results", description="URI authority of the results space")
    latest_file_name: str = Field(
        default="latest-result.json",
        description="Name of the single file exposed at the root",
    )
    json_indent: int = Field(default=2, ge=0, description="Indentation of the encoded payload")

    @property
    def latest_file_path(self) -> str:
        return f"/{self.latest_file_name}"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = False
    app_log_level: str = "INFO"
    app_host: str = "127.0.0.1"
    app_port: int = 8000

    # Nested settings
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    results: ResultsSettings = Field(default_factory=ResultsSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
