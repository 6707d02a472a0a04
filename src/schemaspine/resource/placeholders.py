"""
Placeholder substitution over script content.

Manifesto:
    The same repeatable script is often deployed to environments that differ
    only in placeholder *values* (schema names, grants, users). The resolver
    needs to fingerprint both what actually runs (substituted) and what is
    in source control (raw). Substitution therefore happens in a read-time
    view over the resource, never in the resource itself.

Architecture:
    ::

        PlaceholderReplacingResource
        ├── filename / relative_path / absolute_path(_on_disk) → delegated
        └── read() → StringIO(replacer.replace(resource.read().read()))

Examples:
    >>> replacer = PlaceholderReplacer({"schema": "app"})
    >>> replacer.replace("CREATE VIEW ${schema}.v AS SELECT 1;")
    'CREATE VIEW app.v AS SELECT 1;'

Tags:
    placeholders, templating, resource, schemaspine
"""

from __future__ import annotations

import io
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, TextIO

from schemaspine.errors import PlaceholderError, ResourceReadError
from schemaspine.protocols import LoadableResource

if TYPE_CHECKING:
    from schemaspine.config import ResolverSettings

# Built-in placeholder names, resolved per resource
FILENAME_PLACEHOLDER = "schemaspine:filename"


class PlaceholderReplacer:
    """Replaces ``<prefix>name<suffix>`` tokens with configured values.

    A token whose name has no configured value raises
    :class:`~schemaspine.errors.PlaceholderError`. Tokens never span lines.
    """

    def __init__(
        self,
        placeholders: Mapping[str, str],
        prefix: str = "${",
        suffix: str = "}",
    ) -> None:
        self._placeholders = dict(placeholders)
        self._prefix = prefix
        self._suffix = suffix
        self._pattern = re.compile(
            re.escape(prefix) + r"([^\r\n]+?)" + re.escape(suffix)
        )

    @classmethod
    def from_settings(cls, settings: ResolverSettings) -> PlaceholderReplacer:
        return cls(
            settings.placeholders,
            prefix=settings.placeholder_prefix,
            suffix=settings.placeholder_suffix,
        )

    @property
    def placeholders(self) -> dict[str, str]:
        return dict(self._placeholders)

    def replace(self, text: str, filename: str | None = None) -> str:
        values = dict(self._placeholders)
        if filename is not None:
            values.setdefault(FILENAME_PLACEHOLDER, filename)

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in values:
                raise PlaceholderError(f"{self._prefix}{name}{self._suffix}")
            return values[name]

        return self._pattern.sub(_substitute, text)


class PlaceholderReplacingResource:
    """Read-time placeholder-substituting view over another resource.

    Holds a reference to the wrapped resource only; it never changes it.
    Every call to :meth:`read` re-reads the underlying content.
    """

    def __init__(self, resource: LoadableResource, replacer: PlaceholderReplacer) -> None:
        self._resource = resource
        self._replacer = replacer

    @property
    def wrapped(self) -> LoadableResource:
        return self._resource

    @property
    def filename(self) -> str:
        return self._resource.filename

    @property
    def relative_path(self) -> str:
        return self._resource.relative_path

    @property
    def absolute_path(self) -> str:
        return self._resource.absolute_path

    @property
    def absolute_path_on_disk(self) -> str | None:
        return self._resource.absolute_path_on_disk

    def read(self) -> TextIO:
        try:
            with self._resource.read() as reader:
                raw = reader.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceReadError(
                f"Unable to read {self.relative_path}: {exc}", cause=exc
            ).with_context(resource=self.relative_path) from exc

        try:
            replaced = self._replacer.replace(raw, filename=self.filename)
        except PlaceholderError as exc:
            exc.with_context(resource=self.relative_path)
            raise
        return io.StringIO(replaced)

    def __repr__(self) -> str:
        return f"PlaceholderReplacingResource({self.relative_path!r})"
