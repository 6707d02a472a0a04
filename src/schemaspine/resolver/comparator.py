"""Total order over resolved migrations.

Versioned migrations come first, ascending by version; repeatable migrations
follow, ascending by description. The sort is stable, so repeatable
migrations sharing a description keep discovery order.
"""

from __future__ import annotations

from collections.abc import Iterable

from schemaspine.resolver.models import ResolvedMigration
from schemaspine.resolver.version import MigrationVersion


def migration_sort_key(
    migration: ResolvedMigration,
) -> tuple[int, MigrationVersion | None, str]:
    if migration.version is not None:
        return (0, migration.version, "")
    return (1, None, migration.description)


def sort_migrations(migrations: Iterable[ResolvedMigration]) -> list[ResolvedMigration]:
    return sorted(migrations, key=migration_sort_key)
