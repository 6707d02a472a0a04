"""
Shared pytest fixtures for schemaspine tests.

This module provides:
- Script directory builders (``write_scripts``)
- Settings and resolver factories wired to a temp location
- In-memory resources and providers for tests that avoid the filesystem
- Logging / settings-cache cleanup for test isolation
"""

from __future__ import annotations

import io
import sys
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Any

import pytest
import structlog

# Ensure schemaspine package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from schemaspine.config import ResolverSettings, clear_settings_cache
from schemaspine.logging import clear_context
from schemaspine.resolver import (
    DbApiScriptExecutorFactory,
    SqlMigrationResolver,
    SqlScriptFactory,
)
from schemaspine.resource import FileSystemResourceProvider


# =============================================================================
# In-memory collaborators
# =============================================================================


class MemoryResource:
    """Resource backed by a string; counts opens and closes."""

    def __init__(self, relative_path: str, content: str) -> None:
        self._relative_path = relative_path
        self.content = content
        self.opened = 0
        self.closed = 0

    @property
    def filename(self) -> str:
        return self._relative_path.rsplit("/", 1)[-1]

    @property
    def relative_path(self) -> str:
        return self._relative_path

    @property
    def absolute_path(self) -> str:
        return "/memory/" + self._relative_path

    @property
    def absolute_path_on_disk(self) -> str | None:
        return None

    def read(self) -> io.StringIO:
        self.opened += 1
        resource = self

        class _Stream(io.StringIO):
            def close(self) -> None:
                if not self.closed:
                    resource.closed += 1
                super().close()

        return _Stream(self.content)


class MemoryResourceProvider:
    """Provider returning a fixed list of resources per prefix.

    By default it filters by ``startswith(prefix)`` like a real store;
    ``superset=True`` returns every resource for every prefix.
    """

    def __init__(self, resources: Iterable[Any], superset: bool = False) -> None:
        self.resources = list(resources)
        self.superset = superset
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def get_resource(self, name: str) -> Any:
        for resource in self.resources:
            if resource.relative_path == name:
                return resource
        return None

    def get_resources(self, prefix: str, suffixes: Sequence[str]) -> list[Any]:
        self.calls.append((prefix, tuple(suffixes)))
        if self.superset:
            return list(self.resources)
        return [
            r
            for r in self.resources
            if r.filename.startswith(prefix) and any(r.filename.endswith(s) for s in suffixes)
        ]


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_logging_and_settings():
    """Reset structlog configuration, log context and the settings cache."""
    yield
    structlog.reset_defaults()
    clear_context()
    clear_settings_cache()


# =============================================================================
# Script directories and resolvers
# =============================================================================


@pytest.fixture()
def sql_dir(tmp_path: Path) -> Path:
    d = tmp_path / "sql"
    d.mkdir()
    return d


@pytest.fixture()
def write_scripts(sql_dir: Path) -> Callable[[dict[str, str]], Path]:
    """Write ``{relative_path: content}`` below ``sql_dir`` and return it."""

    def _write(scripts: dict[str, str]) -> Path:
        for name, content in scripts.items():
            path = sql_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return sql_dir

    return _write


@pytest.fixture()
def make_settings(sql_dir: Path) -> Callable[..., ResolverSettings]:
    def _make(**overrides: Any) -> ResolverSettings:
        overrides.setdefault("locations", (sql_dir,))
        return ResolverSettings(**overrides)

    return _make


@pytest.fixture()
def make_resolver(make_settings) -> Callable[..., SqlMigrationResolver]:
    """Build a filesystem-backed resolver; kwargs go to ResolverSettings."""

    def _make(provider: Any = None, logger: Any = None, **overrides: Any) -> SqlMigrationResolver:
        settings = make_settings(**overrides)
        provider = provider or FileSystemResourceProvider(settings.locations, settings.encoding)
        return SqlMigrationResolver(
            provider,
            DbApiScriptExecutorFactory(),
            SqlScriptFactory(settings),
            settings,
            logger=logger,
        )

    return _make


@pytest.fixture()
def memory_resource() -> type[MemoryResource]:
    return MemoryResource


@pytest.fixture()
def memory_provider() -> type[MemoryResourceProvider]:
    return MemoryResourceProvider
