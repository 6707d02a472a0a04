"""Filesystem-backed resources and discovery.

Scans one or more location directories for script files. This is the
default discovery collaborator; anything else that satisfies
:class:`~schemaspine.protocols.ResourceProvider` can replace it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from schemaspine.errors import ResourceReadError
from schemaspine.logging import get_logger


@dataclass(frozen=True)
class FileSystemResource:
    """A script file below a location directory.

    Parameters
    ----------
    location
        The location directory the file was discovered under.
    path
        Path of the file itself.
    encoding
        Text encoding used by :meth:`read`.
    """

    location: Path
    path: Path
    encoding: str = "utf-8"

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def relative_path(self) -> str:
        return self.path.relative_to(self.location).as_posix()

    @property
    def absolute_path(self) -> str:
        return str(self.path.resolve())

    @property
    def absolute_path_on_disk(self) -> str | None:
        return str(self.path.resolve())

    def read(self) -> TextIO:
        """Open a fresh text stream over the file. The caller closes it."""
        try:
            return open(self.path, encoding=self.encoding)
        except OSError as exc:
            raise ResourceReadError(
                f"Unable to open {self.relative_path}: {exc}", cause=exc
            ).with_context(resource=self.relative_path) from exc
        except LookupError as exc:
            raise ResourceReadError(
                f"Unknown encoding {self.encoding!r} for {self.relative_path}", cause=exc
            ).with_context(resource=self.relative_path) from exc


class FileSystemResourceProvider:
    """Discovers script files below a set of location directories.

    Example::

        provider = FileSystemResourceProvider([Path("sql")])
        for resource in provider.get_resources("V", [".sql"]):
            print(resource.relative_path)
    """

    def __init__(
        self,
        locations: Iterable[Path | str],
        encoding: str = "utf-8",
        logger: Any = None,
    ) -> None:
        self._locations = [Path(location) for location in locations]
        self._encoding = encoding
        self._logger = logger or get_logger(__name__)

    @property
    def locations(self) -> list[Path]:
        return list(self._locations)

    def get_resource(self, name: str) -> FileSystemResource | None:
        """Return the resource at relative path ``name``, or ``None``."""
        for location in self._locations:
            candidate = location / name
            if candidate.is_file():
                return FileSystemResource(location, candidate, self._encoding)
        return None

    def get_resources(
        self, prefix: str, suffixes: Sequence[str]
    ) -> list[FileSystemResource]:
        """Return files whose name starts with ``prefix`` and ends with a suffix.

        Results are sorted by location then relative path; a file reachable
        from two overlapping locations is returned once.
        """
        seen: set[Path] = set()
        resources: list[FileSystemResource] = []

        for location in self._locations:
            if not location.is_dir():
                self._logger.warning(
                    "resource.location_missing", location=str(location)
                )
                continue

            found = []
            for path in location.rglob("*"):
                if not path.is_file():
                    continue
                name = path.name
                if not name.startswith(prefix):
                    continue
                if not any(name.endswith(suffix) for suffix in suffixes):
                    continue
                resolved = path.resolve()
                if resolved in seen:
                    continue
                seen.add(resolved)
                found.append(FileSystemResource(location, path, self._encoding))

            resources.extend(sorted(found, key=lambda r: r.relative_path))

        self._logger.debug(
            "resource.scanned",
            prefix=prefix,
            suffixes=list(suffixes),
            count=len(resources),
        )
        return resources
