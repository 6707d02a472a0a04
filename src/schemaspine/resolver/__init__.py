"""Migration resolution: filenames in, ordered descriptors out.

Modules
-------
version       MigrationVersion (piecewise-comparable)
name_parser   ResourceName, ResourceNameParser
checksum      Crc32ChecksumCalculator
models        ResolvedMigration
comparator    migration_sort_key(), sort_migrations()
executor      SqlScript, SqlScriptFactory, SqlMigrationExecutor, DbApiScriptExecutorFactory
sql           SqlMigrationResolver, is_sql_callback()
"""

from schemaspine.resolver.checksum import Crc32ChecksumCalculator
from schemaspine.resolver.comparator import migration_sort_key, sort_migrations
from schemaspine.resolver.executor import (
    DbApiScriptExecutor,
    DbApiScriptExecutorFactory,
    SqlMigrationExecutor,
    SqlScript,
    SqlScriptFactory,
)
from schemaspine.resolver.models import ResolvedMigration
from schemaspine.resolver.name_parser import ResourceName, ResourceNameParser, ResourceType
from schemaspine.resolver.sql import SqlMigrationResolver, is_sql_callback
from schemaspine.resolver.version import MigrationVersion

__all__ = [
    "Crc32ChecksumCalculator",
    "DbApiScriptExecutor",
    "DbApiScriptExecutorFactory",
    "MigrationVersion",
    "ResolvedMigration",
    "ResourceName",
    "ResourceNameParser",
    "ResourceType",
    "SqlMigrationExecutor",
    "SqlMigrationResolver",
    "SqlScript",
    "SqlScriptFactory",
    "is_sql_callback",
    "migration_sort_key",
    "sort_migrations",
]
