"""Execution handles attached to resolved SQL migrations.

The resolver builds these but never runs them; a migrate step calls
:meth:`SqlMigrationExecutor.execute` with a live connection.

Example::

    import sqlite3

    conn = sqlite3.connect("app.db")
    for migration in resolver.resolve_migrations():
        migration.executor.execute(conn)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from schemaspine.config import ResolverSettings
from schemaspine.errors import ResourceReadError
from schemaspine.logging import get_logger
from schemaspine.protocols import (
    Connection,
    LoadableResource,
    ResourceProvider,
    SqlScriptExecutorFactory,
)
from schemaspine.resource.placeholders import PlaceholderReplacer, PlaceholderReplacingResource


@dataclass(frozen=True)
class SqlScript:
    """A script bound to its resource. Content is read lazily."""

    resource: LoadableResource
    mixed: bool = False
    resource_provider: ResourceProvider | None = None

    def read_text(self) -> str:
        try:
            with self.resource.read() as reader:
                return reader.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceReadError(
                f"Unable to read {self.resource.relative_path}: {exc}", cause=exc
            ).with_context(resource=self.resource.relative_path) from exc


class SqlScriptFactory:
    """Creates :class:`SqlScript` objects.

    When placeholder replacement is enabled the script reads through a
    :class:`PlaceholderReplacingResource`, so what executes is the
    substituted text. A ``replacer`` passed to :meth:`create_sql_script`
    takes precedence over the one built from settings; the resolver passes
    the replacer it fingerprints with.
    """

    def __init__(
        self, settings: ResolverSettings, replacer: PlaceholderReplacer | None = None
    ) -> None:
        self._placeholder_replacement = settings.placeholder_replacement
        self._replacer = replacer or PlaceholderReplacer.from_settings(settings)

    def create_sql_script(
        self,
        resource: LoadableResource,
        mixed: bool,
        resource_provider: ResourceProvider | None = None,
        replacer: PlaceholderReplacer | None = None,
    ) -> SqlScript:
        if self._placeholder_replacement:
            resource = PlaceholderReplacingResource(resource, replacer or self._replacer)
        return SqlScript(resource, mixed=mixed, resource_provider=resource_provider)


class DbApiScriptExecutor:
    """Runs a script on a DB-API connection and commits.

    Uses ``executescript`` where the driver has it (sqlite3), ``execute``
    otherwise. The transaction is rolled back if the script fails.
    """

    def __init__(
        self,
        connection: Connection,
        undo: bool = False,
        batch: bool = False,
        logger: Any = None,
    ) -> None:
        self._conn = connection
        self.undo = undo
        self.batch = batch
        self._logger = logger or get_logger(__name__)

    def execute(self, script: SqlScript) -> None:
        sql = script.read_text()
        name = script.resource.relative_path
        try:
            if hasattr(self._conn, "executescript"):
                self._conn.executescript(sql)
            else:
                self._conn.execute(sql)
            self._conn.commit()
        except Exception as exc:
            self._conn.rollback()
            self._logger.error("migration.failed", migration=name, error=str(exc))
            raise
        self._logger.info("migration.applied", migration=name)


class DbApiScriptExecutorFactory:
    """Default :class:`~schemaspine.protocols.SqlScriptExecutorFactory`."""

    def create_sql_script_executor(
        self, connection: Connection, undo: bool = False, batch: bool = False
    ) -> DbApiScriptExecutor:
        return DbApiScriptExecutor(connection, undo=undo, batch=batch)


class SqlMigrationExecutor:
    """Opaque handle the resolver attaches to each SQL migration."""

    def __init__(
        self,
        executor_factory: SqlScriptExecutorFactory,
        script: SqlScript,
        undo: bool = False,
        batch: bool = False,
    ) -> None:
        self._executor_factory = executor_factory
        self.script = script
        self.undo = undo
        self.batch = batch

    def can_execute_in_transaction(self) -> bool:
        return not self.script.mixed

    def execute(self, connection: Connection) -> None:
        executor = self._executor_factory.create_sql_script_executor(
            connection, undo=self.undo, batch=self.batch
        )
        executor.execute(self.script)

    def __repr__(self) -> str:
        return f"SqlMigrationExecutor({self.script.resource.relative_path!r})"
