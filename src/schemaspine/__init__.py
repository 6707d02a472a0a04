"""schemaspine - resolve SQL migration scripts into ordered, checksummed descriptors.

Manifesto:
    A migration engine is only as trustworthy as its idea of *which* scripts
    exist, *what version* each one is, and *whether it changed*. schemaspine
    answers exactly those questions and nothing else: it does not execute
    scripts and does not persist history.

Quick start::

    from schemaspine import (
        DbApiScriptExecutorFactory,
        FileSystemResourceProvider,
        ResolverSettings,
        SqlMigrationResolver,
        SqlScriptFactory,
    )

    settings = ResolverSettings(placeholders={"schema": "app"})
    resolver = SqlMigrationResolver(
        FileSystemResourceProvider(settings.locations, settings.encoding),
        DbApiScriptExecutorFactory(),
        SqlScriptFactory(settings),
        settings,
    )
    for migration in resolver.resolve_migrations():
        print(migration.version, migration.description, migration.checksum)

Packages
--------
config      ResolverSettings, get_settings()
resource    Filesystem discovery and placeholder views
resolver    Parsing, checksums, ordering and the SQL resolver
cli         ``schemaspine`` command line

Tags:
    schemaspine, migrations, schema, resolver
"""

from schemaspine.config import ResolverSettings, get_settings
from schemaspine.enums import Event, MigrationType, ValidationPolicy
from schemaspine.errors import (
    MigrationValidationError,
    PlaceholderError,
    ResourceReadError,
    SchemaSpineError,
)
from schemaspine.resolver import (
    Crc32ChecksumCalculator,
    DbApiScriptExecutorFactory,
    MigrationVersion,
    ResolvedMigration,
    ResourceNameParser,
    SqlMigrationResolver,
    SqlScriptFactory,
)
from schemaspine.resource import (
    FileSystemResourceProvider,
    PlaceholderReplacer,
    PlaceholderReplacingResource,
)

__version__ = "0.1.0"

__all__ = [
    "Crc32ChecksumCalculator",
    "DbApiScriptExecutorFactory",
    "Event",
    "FileSystemResourceProvider",
    "MigrationType",
    "MigrationValidationError",
    "MigrationVersion",
    "PlaceholderError",
    "PlaceholderReplacer",
    "PlaceholderReplacingResource",
    "ResolvedMigration",
    "ResolverSettings",
    "ResourceNameParser",
    "ResourceReadError",
    "SchemaSpineError",
    "SqlMigrationResolver",
    "SqlScriptFactory",
    "ValidationPolicy",
    "get_settings",
    "__version__",
]
