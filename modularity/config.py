"""Configuration settings for modularity — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Naming convention and lookup settings with env-driven overrides.

    All values can be overridden via environment variables prefixed with MODULARITY_.
    Example: MODULARITY_SEARCH_PATHS=/app/traits,/app/shared overrides search_paths.
    """

    # Naming convention
    trait_file_suffix: str = "_trait"  # comparable → comparable_trait.py
    namespace_suffix: str = "Traits"  # Box → BoxTraits
    holder_suffix: str = "Trait"  # comparable → ComparableTrait

    # Lookup
    search_paths: str = ""  # comma separated directories, tried in order
    caller_introspection: bool = True  # fall back to the calling file's directory

    model_config = SettingsConfigDict(
        env_prefix="MODULARITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def search_path_list(self) -> list[str]:
        return [p.strip() for p in self.search_paths.split(",") if p.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
