"""Validated, cached configuration for the resolution pipeline.

Quick start::

    from schemaspine.config import get_settings

    settings = get_settings()
    print(settings.sql_migration_prefix)      # "V"
    print(settings.sql_migration_suffixes)    # (".sql",)

Tags:
    schemaspine, configuration, settings, pydantic
"""

from .settings import (
    ResolverSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "ResolverSettings",
    "get_settings",
    "clear_settings_cache",
]
