"""
Canonical protocol definitions for schemaspine.

The resolution pipeline depends on the *shape* of its collaborators, never on
their concrete classes. Every module that needs a resource, a resource
provider, a checksum calculator or a script executor imports the contract
from here.

Architecture:
    ::

        protocols.py
        ├── LoadableResource       - re-openable script content + path metadata
        ├── ResourceProvider       - discovery: (prefix, suffixes) -> resources
        ├── ChecksumCalculator     - content fingerprint
        ├── Connection             - minimal DB-API connection
        ├── SqlScriptExecutor      - runs one SqlScript on a connection
        └── SqlScriptExecutorFactory

    Implementations:
        schemaspine.resource.filesystem     FileSystemResource / Provider
        schemaspine.resource.placeholders   PlaceholderReplacingResource
        schemaspine.resolver.checksum       Crc32ChecksumCalculator
        schemaspine.resolver.executor       DbApiScriptExecutorFactory

Guardrails:
    ❌ DON'T: isinstance-check concrete resource classes in the resolver
    ✅ DO: Accept anything matching LoadableResource

Tags:
    protocol, resource, checksum, executor, schemaspine
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, TextIO, runtime_checkable

if TYPE_CHECKING:
    from schemaspine.resolver.executor import SqlScript


@runtime_checkable
class LoadableResource(Protocol):
    """
    A discovered script whose content can be read any number of times.

    ``read()`` returns a *fresh* text stream on every call. Callers own the
    stream and must close it (it is a context manager).
    """

    @property
    def filename(self) -> str: ...

    @property
    def relative_path(self) -> str: ...

    @property
    def absolute_path(self) -> str: ...

    @property
    def absolute_path_on_disk(self) -> str | None: ...

    def read(self) -> TextIO: ...


@runtime_checkable
class ResourceProvider(Protocol):
    """
    Discovery collaborator.

    Returns resources whose filename starts with ``prefix`` and ends with one
    of ``suffixes``. Order is unspecified; results must be free of
    duplicates. Providers may return supersets; the resolver filters.
    """

    def get_resource(self, name: str) -> LoadableResource | None: ...

    def get_resources(
        self, prefix: str, suffixes: Sequence[str]
    ) -> Iterable[LoadableResource]: ...


@runtime_checkable
class ChecksumCalculator(Protocol):
    """Deterministic fingerprint of a resource's content."""

    def calculate(self, resource: LoadableResource) -> int: ...


@runtime_checkable
class Connection(Protocol):
    """Minimal synchronous DB-API connection used by script executors."""

    def execute(self, sql: str, params: tuple = ()) -> Any: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


class SqlScriptExecutor(Protocol):
    """Runs one script against a connection."""

    def execute(self, script: SqlScript) -> None: ...


class SqlScriptExecutorFactory(Protocol):
    """Builds an executor bound to a connection."""

    def create_sql_script_executor(
        self, connection: Connection, undo: bool = False, batch: bool = False
    ) -> SqlScriptExecutor: ...


__all__ = [
    "LoadableResource",
    "ResourceProvider",
    "ChecksumCalculator",
    "Connection",
    "SqlScriptExecutor",
    "SqlScriptExecutorFactory",
]
