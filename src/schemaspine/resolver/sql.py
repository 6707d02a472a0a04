"""
SQL migration resolver.

Manifesto:
    Everything downstream (validate, migrate, repair) trusts the list this
    resolver returns: which scripts are migrations, which version each one
    has, what its content fingerprint is and in what order they run. The
    resolver is strict about *identity* and lenient about *noise*: files that
    are not migrations disappear from the result without errors, while
    unreadable content aborts the whole resolution.

Architecture:
    ::

        resolve_migrations()
        │
        ├── pass(sql_migration_prefix,            repeatable=False)
        ├── pass(repeatable_sql_migration_prefix, repeatable=True)
        │      │
        │      ├── provider.get_resources(prefix, suffixes)
        │      ├── parser.parse(filename)
        │      ├── skip: invalid │ callback │ prefix mismatch   (no I/O yet)
        │      ├── checksum / equivalent_checksum
        │      └── ResolvedMigration(..., SqlMigrationExecutor)
        │
        └── sort_migrations(versioned + repeatable)

    Checksums:
        ┌──────────────────────────────┬─────────────────┬──────────────────────┐
        │ entry                        │ checksum        │ equivalent_checksum  │
        ├──────────────────────────────┼─────────────────┼──────────────────────┤
        │ versioned                    │ raw             │ None                 │
        │ repeatable, placeholders on  │ substituted     │ raw                  │
        │ repeatable, placeholders off │ raw             │ None                 │
        └──────────────────────────────┴─────────────────┴──────────────────────┘

Examples:
    >>> settings = ResolverSettings(locations=[Path("sql")])
    >>> provider = FileSystemResourceProvider(settings.locations)
    >>> resolver = SqlMigrationResolver(
    ...     provider, DbApiScriptExecutorFactory(), SqlScriptFactory(settings), settings
    ... )
    >>> [m.script for m in resolver.resolve_migrations()]
    ['V1__Init.sql', 'V1_1__AddTable.sql', 'R__View.sql']

Guardrails:
    ❌ DON'T: Raise for files that are not migrations
    ✅ DO: Skip them and log at debug level

    ❌ DON'T: Cache descriptors between calls
    ✅ DO: Re-read every resource on every call

Tags:
    resolver, migrations, checksum, ordering, schemaspine
"""

from __future__ import annotations

from typing import Any

from schemaspine.config import ResolverSettings
from schemaspine.enums import Event, MigrationType
from schemaspine.logging import LogContext, get_logger
from schemaspine.protocols import (
    ChecksumCalculator,
    LoadableResource,
    ResourceProvider,
    SqlScriptExecutorFactory,
)
from schemaspine.resolver.checksum import Crc32ChecksumCalculator
from schemaspine.resolver.comparator import sort_migrations
from schemaspine.resolver.executor import SqlMigrationExecutor, SqlScriptFactory
from schemaspine.resolver.models import ResolvedMigration
from schemaspine.resolver.name_parser import ResourceName, ResourceNameParser
from schemaspine.resource.placeholders import PlaceholderReplacer, PlaceholderReplacingResource


def is_sql_callback(result: ResourceName) -> bool:
    """True if the parsed prefix names a lifecycle event rather than a migration."""
    return Event.from_id(result.prefix) is not None


class SqlMigrationResolver:
    """Resolves versioned and repeatable SQL migrations from a resource provider.

    Parameters
    ----------
    resource_provider
        Discovery collaborator.
    script_executor_factory
        Passed to each :class:`SqlMigrationExecutor`; never invoked here.
    sql_script_factory
        Builds the script attached to each execution handle.
    settings
        Naming convention and placeholder settings. Read-only.
    checksum_calculator
        Defaults to :class:`Crc32ChecksumCalculator`.
    placeholder_replacer
        Defaults to one built from ``settings``.
    logger
        Structured logger. Defaults to one named after this module.
    """

    def __init__(
        self,
        resource_provider: ResourceProvider,
        script_executor_factory: SqlScriptExecutorFactory,
        sql_script_factory: SqlScriptFactory,
        settings: ResolverSettings,
        *,
        checksum_calculator: ChecksumCalculator | None = None,
        placeholder_replacer: PlaceholderReplacer | None = None,
        logger: Any = None,
    ) -> None:
        self._resource_provider = resource_provider
        self._script_executor_factory = script_executor_factory
        self._sql_script_factory = sql_script_factory
        self._settings = settings
        self._checksum_calculator = checksum_calculator or Crc32ChecksumCalculator()
        self._placeholder_replacer = placeholder_replacer or PlaceholderReplacer.from_settings(settings)
        self._logger = logger or get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve_migrations(self) -> list[ResolvedMigration]:
        """Resolve all migrations, versioned first, then repeatable.

        Raises :class:`~schemaspine.errors.ResourceReadError` or
        :class:`~schemaspine.errors.PlaceholderError` when a script's content
        cannot be read or substituted. Nothing else is raised.
        """
        suffixes = self._settings.sql_migration_suffixes
        migrations: list[ResolvedMigration] = []

        with LogContext(migration_pass="versioned"):
            self._add_migrations(
                migrations, self._settings.sql_migration_prefix, suffixes, repeatable=False
            )
        with LogContext(migration_pass="repeatable"):
            self._add_migrations(
                migrations,
                self._settings.repeatable_sql_migration_prefix,
                suffixes,
                repeatable=True,
            )

        resolved = sort_migrations(migrations)
        self._logger.info(
            "migration.resolved",
            versioned=sum(1 for m in resolved if not m.is_repeatable),
            repeatable=sum(1 for m in resolved if m.is_repeatable),
        )
        return resolved

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _add_migrations(
        self,
        migrations: list[ResolvedMigration],
        prefix: str,
        suffixes: tuple[str, ...],
        repeatable: bool,
    ) -> None:
        parser = ResourceNameParser(self._settings)

        for resource in self._resource_provider.get_resources(prefix, suffixes):
            filename = resource.filename
            result = parser.parse(filename)

            reason = self._skip_reason(result, prefix)
            if reason is not None:
                self._logger.debug(
                    "migration.skipped",
                    filename=filename,
                    prefix=prefix,
                    reason=reason,
                    detail=result.validity_message or None,
                )
                continue

            sql_script = self._sql_script_factory.create_sql_script(
                resource,
                self._settings.mixed,
                self._resource_provider,
                replacer=self._placeholder_replacer,
            )

            checksum = self._checksum_for(repeatable, resource)
            equivalent_checksum = self._equivalent_checksum_for(repeatable, resource)

            migrations.append(
                ResolvedMigration(
                    version=result.version,
                    description=result.description,
                    script=resource.relative_path,
                    checksum=checksum,
                    equivalent_checksum=equivalent_checksum,
                    type=MigrationType.SQL,
                    physical_location=resource.absolute_path_on_disk,
                    executor=SqlMigrationExecutor(
                        self._script_executor_factory, sql_script, undo=False, batch=False
                    ),
                )
            )

    @staticmethod
    def _skip_reason(result: ResourceName, prefix: str) -> str | None:
        if not result.valid:
            return "invalid_name"
        if is_sql_callback(result):
            return "callback"
        # TODO: surface prefix mismatches as a configuration diagnostic once
        # providers guarantee exact-prefix results.
        if result.prefix != prefix:
            return "prefix_mismatch"
        return None

    def _checksum_for(self, repeatable: bool, resource: LoadableResource) -> int:
        if repeatable and self._settings.placeholder_replacement:
            return self._checksum_calculator.calculate(
                PlaceholderReplacingResource(resource, self._placeholder_replacer)
            )
        return self._checksum_calculator.calculate(resource)

    def _equivalent_checksum_for(
        self, repeatable: bool, resource: LoadableResource
    ) -> int | None:
        if repeatable and self._settings.placeholder_replacement:
            return self._checksum_calculator.calculate(resource)
        return None
