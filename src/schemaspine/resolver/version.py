"""Orderable migration versions.

A version string is split on ``.`` and ``_`` into components. Numeric
components compare as integers (``1.10`` > ``1.9``), alphanumeric components
compare as strings and sort after numeric ones. Trailing zero components are
insignificant, so ``1``, ``1.0`` and ``1_0_0`` are the same version.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import total_ordering

from schemaspine.errors import InvalidVersionError

VERSION_SEPARATORS = (".", "_")

_COMPONENT = re.compile(r"[0-9A-Za-z]+")
_ZERO = (0, 0)


def _component_key(part: int | str) -> tuple[int, int | str]:
    if isinstance(part, int):
        return (0, part)
    return (1, part)


@total_ordering
class MigrationVersion:
    """Immutable, piecewise-comparable version.

    Examples:
        >>> MigrationVersion.from_version("1_2").parts
        (1, 2)
        >>> MigrationVersion.from_version("1.10") > MigrationVersion.from_version("1.9")
        True
        >>> MigrationVersion.from_version("1.0") == MigrationVersion.from_version("1")
        True
    """

    __slots__ = ("_parts", "_key")

    def __init__(self, parts: Sequence[int | str]) -> None:
        if not parts:
            raise InvalidVersionError("A version needs at least one component")
        self._parts = tuple(parts)
        key = [_component_key(part) for part in self._parts]
        while len(key) > 1 and key[-1] == _ZERO:
            key.pop()
        self._key = tuple(key)

    @classmethod
    def from_version(cls, version: str) -> MigrationVersion:
        """Parse ``version``, raising :class:`InvalidVersionError` when malformed."""
        if not version:
            raise InvalidVersionError("Version must not be empty")

        normalized = version
        for separator in VERSION_SEPARATORS[1:]:
            normalized = normalized.replace(separator, VERSION_SEPARATORS[0])

        parts: list[int | str] = []
        for token in normalized.split(VERSION_SEPARATORS[0]):
            if not _COMPONENT.fullmatch(token):
                raise InvalidVersionError(
                    f"Invalid version {version!r}: components may only contain "
                    "0-9, A-Z and a-z, separated by '.' or '_'"
                )
            parts.append(int(token) if token.isdigit() else token)
        return cls(parts)

    @property
    def parts(self) -> tuple[int | str, ...]:
        return self._parts

    @property
    def version(self) -> str:
        return ".".join(str(part) for part in self._parts)

    def _compare(self, other: MigrationVersion) -> int:
        mine, theirs = self._key, other._key
        for index in range(max(len(mine), len(theirs))):
            left = mine[index] if index < len(mine) else _ZERO
            right = theirs[index] if index < len(theirs) else _ZERO
            if left != right:
                return -1 if left < right else 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MigrationVersion):
            return NotImplemented
        return self._compare(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MigrationVersion):
            return NotImplemented
        return self._compare(other) < 0

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        return self.version

    def __repr__(self) -> str:
        return f"MigrationVersion({self.version!r})"
