"""
Filename grammar for migration and callback scripts.

Manifesto:
    A script's filename *is* its identity: prefix, version and description
    are all encoded in it. Parsing must never raise for a malformed name;
    a name that does not fit the grammar is simply not a migration, and the
    resolver skips it as if the file did not exist.

Architecture:
    ::

        V1_2__add_users.sql
        │└┬┘└┘└───┬───┘└┬─┘
        │ │  │    │     └── suffix       (settings.sql_migration_suffixes)
        │ │  │    └──────── description
        │ │  └───────────── separator    (settings.sql_migration_separator)
        │ └──────────────── version      → MigrationVersion((1, 2))
        └────────────────── prefix       (versioned / repeatable / event id)

        R__refresh_view.sql        repeatable, no version
        afterMigrate.sql           callback, separator optional

Examples:
    >>> parser = ResourceNameParser(ResolverSettings())
    >>> name = parser.parse("V1_2__add_users.sql")
    >>> (name.prefix, name.version.parts, name.description)
    ('V', (1, 2), 'add_users')
    >>> parser.parse("README.md").valid
    False

Tags:
    parsing, filename, grammar, versioning, schemaspine
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from schemaspine.config import ResolverSettings
from schemaspine.enums import Event
from schemaspine.errors import InvalidVersionError
from schemaspine.resolver.version import MigrationVersion


class ResourceType(str, Enum):
    """What a matched prefix says the script is."""

    MIGRATION = "migration"
    REPEATABLE_MIGRATION = "repeatable_migration"
    CALLBACK = "callback"


@dataclass(frozen=True)
class ResourceName:
    """Structured identity parsed from a filename.

    Invalid names carry only ``filename`` and ``validity_message``; their
    other fields are empty and must not be used.
    """

    filename: str
    prefix: str = ""
    version: MigrationVersion | None = None
    description: str = ""
    suffix: str = ""
    valid: bool = False
    validity_message: str = ""

    @classmethod
    def invalid(cls, filename: str, message: str) -> ResourceName:
        return cls(filename=filename, valid=False, validity_message=message)

    @property
    def is_versioned(self) -> bool:
        return self.valid and self.version is not None

    @property
    def is_repeatable(self) -> bool:
        return self.valid and self.version is None


class ResourceNameParser:
    """Parses filenames against the configured naming convention.

    Known prefixes are the versioned prefix, the repeatable prefix and every
    lifecycle event id. The longest matching prefix wins, so a configured
    prefix never shadows a longer event id that happens to start with it.
    """

    def __init__(self, settings: ResolverSettings) -> None:
        self._settings = settings
        prefixes: dict[str, ResourceType] = {
            event_id: ResourceType.CALLBACK for event_id in Event.ids()
        }
        prefixes[settings.sql_migration_prefix] = ResourceType.MIGRATION
        prefixes[settings.repeatable_sql_migration_prefix] = ResourceType.REPEATABLE_MIGRATION
        self._prefixes = sorted(prefixes.items(), key=lambda item: len(item[0]), reverse=True)
        self._suffixes = sorted(settings.sql_migration_suffixes, key=len, reverse=True)

    def parse(self, filename: str) -> ResourceName:
        suffix = self._match_suffix(filename)
        if suffix is None:
            return ResourceName.invalid(
                filename,
                f"Unrecognised suffix in {filename!r}; expected one of "
                f"{', '.join(self._settings.sql_migration_suffixes)}",
            )
        stem = filename[: len(filename) - len(suffix)]

        match = self._match_prefix(stem)
        if match is None:
            return ResourceName.invalid(filename, f"Unrecognised migration name format: {filename!r}")
        prefix, resource_type = match

        remainder = stem[len(prefix):]
        separator = self._settings.sql_migration_separator
        head, found, description = remainder.partition(separator)

        if resource_type is ResourceType.CALLBACK:
            if head:
                return ResourceName.invalid(
                    filename, f"Callback {filename!r} must not have text between event and separator"
                )
            return ResourceName(filename, prefix, None, description, suffix, True)

        if not found:
            return ResourceName.invalid(
                filename, f"Missing separator {separator!r} in migration name {filename!r}"
            )

        if resource_type is ResourceType.REPEATABLE_MIGRATION:
            if head:
                return ResourceName.invalid(
                    filename, f"Repeatable migration {filename!r} must not have a version"
                )
            return ResourceName(filename, prefix, None, description, suffix, True)

        if not head:
            return ResourceName.invalid(filename, f"Migration version missing in {filename!r}")
        try:
            version = MigrationVersion.from_version(head)
        except InvalidVersionError as exc:
            return ResourceName.invalid(filename, exc.message)
        return ResourceName(filename, prefix, version, description, suffix, True)

    def _match_suffix(self, filename: str) -> str | None:
        for suffix in self._suffixes:
            if filename.endswith(suffix) and len(filename) > len(suffix):
                return suffix
        return None

    def _match_prefix(self, stem: str) -> tuple[str, ResourceType] | None:
        for prefix, resource_type in self._prefixes:
            if stem.startswith(prefix):
                return prefix, resource_type
        return None
