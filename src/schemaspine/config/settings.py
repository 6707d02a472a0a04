"""
Resolver settings for schemaspine.

Manifesto:
    The naming convention of migration scripts is configuration, not code.
    ``ResolverSettings`` holds every option the resolution pipeline reads,
    validated once at construction and read-only afterwards so a resolution
    call never sees settings change underneath it.

All fields can be set via ``SCHEMASPINE_*`` environment variables (e.g.
``SCHEMASPINE_SQL_MIGRATION_PREFIX=M``) or through a ``.env`` file. List and
dict fields take JSON (``SCHEMASPINE_PLACEHOLDERS='{"schema": "app"}'``).

Tags:
    configuration, settings, pydantic, schemaspine
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ResolverSettings(BaseSettings):
    """Naming convention, placeholder and location settings."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEMASPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ── Naming convention ────────────────────────────────────────
    sql_migration_prefix: str = Field(default="V", description="Prefix of versioned scripts")
    repeatable_sql_migration_prefix: str = Field(default="R", description="Prefix of repeatable scripts")
    sql_migration_separator: str = Field(default="__", description="Separates version from description")
    sql_migration_suffixes: tuple[str, ...] = Field(default=(".sql",))

    # ── Placeholders ─────────────────────────────────────────────
    placeholder_replacement: bool = Field(default=True)
    placeholders: dict[str, str] = Field(default_factory=dict)
    placeholder_prefix: str = Field(default="${")
    placeholder_suffix: str = Field(default="}")

    # ── Execution (passed through to the script factory) ─────────
    mixed: bool = Field(default=False, description="Allow mixing transactional and non-transactional statements")

    # ── Discovery ────────────────────────────────────────────────
    encoding: str = Field(default="utf-8")
    locations: tuple[Path, ...] = Field(default=(Path("sql"),))

    @model_validator(mode="after")
    def _validate_naming(self) -> ResolverSettings:
        """Reject naming settings that would make filenames ambiguous."""
        for name in (
            "sql_migration_prefix",
            "repeatable_sql_migration_prefix",
            "sql_migration_separator",
            "placeholder_prefix",
            "placeholder_suffix",
        ):
            if not getattr(self, name):
                raise ValueError(f"{name} must not be empty")
        if not self.sql_migration_suffixes:
            raise ValueError("sql_migration_suffixes must contain at least one suffix")
        if any(not suffix for suffix in self.sql_migration_suffixes):
            raise ValueError("sql_migration_suffixes must not contain empty suffixes")
        if self.sql_migration_prefix == self.repeatable_sql_migration_prefix:
            raise ValueError(
                "sql_migration_prefix and repeatable_sql_migration_prefix must differ "
                f"(both are {self.sql_migration_prefix!r})"
            )
        return self


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, ResolverSettings] = {}


def get_settings(
    *,
    env_file: Path | str | None = None,
    _force_reload: bool = False,
) -> ResolverSettings:
    """Load, validate, and cache a :class:`ResolverSettings` instance.

    Parameters
    ----------
    env_file:
        Explicit ``.env`` file.  Defaults to ``.env`` in the working directory.
    _force_reload:
        Bypass cache and reload.
    """
    cache_key = str(env_file or "")

    if not _force_reload and cache_key in _settings_cache:
        return _settings_cache[cache_key]

    if env_file is not None:
        settings = ResolverSettings(_env_file=env_file)  # type: ignore[call-arg]
    else:
        settings = ResolverSettings()

    _settings_cache[cache_key] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
