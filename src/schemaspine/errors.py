"""
Structured error types for schemaspine.

Resolution has exactly one class of fatal failure: the content of a
discovered script could not be read, decoded, substituted or fingerprinted.
Everything else (malformed filenames, lifecycle callbacks, scripts that
belong to the other pass) is a normal skip and never raised.

Manifesto:
    - **Typed Error Hierarchy:** One subclass per failure domain
    - **Rich Context:** Errors carry the resource and prefix they relate to
    - **Error Chaining:** The original ``OSError`` / ``UnicodeDecodeError``
      is kept as ``cause`` and as ``__cause__``

Architecture:
    ::

        SchemaSpineError (category, context, cause)
        ├── ResourceReadError        (STORAGE)
        ├── PlaceholderError         (CONFIG)
        ├── InvalidVersionError      (PARSE)
        └── MigrationValidationError (VALIDATION)

Usage:
    from schemaspine.errors import ResourceReadError

    try:
        handle = open(path, encoding=encoding)
    except OSError as exc:
        raise ResourceReadError(f"Unable to open {path}", cause=exc) from exc

Tags:
    errors, exceptions, error-handling, schemaspine
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    STORAGE = "STORAGE"           # Disk, file system, decoding
    PARSE = "PARSE"               # Filename / version parsing
    CONFIG = "CONFIG"             # Missing placeholder values, bad settings
    VALIDATION = "VALIDATION"     # Inconsistent resolved migrations
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Attributes:
        resource: Relative path of the script being processed
        prefix: Prefix of the resolution pass (``V``, ``R``)
        metadata: Additional key-value pairs
    """

    resource: str | None = None
    prefix: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ("resource", "prefix"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class SchemaSpineError(Exception):
    """
    Base exception for all schemaspine errors.

    Subclasses set ``default_category``; callers may override it per
    instance.

    Examples:
        >>> err = SchemaSpineError("boom")
        >>> err.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> err.with_context(resource="V1__init.sql").context.resource
        'V1__init.sql'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

    def with_context(self, **kwargs: Any) -> SchemaSpineError:
        """Set context fields, returning ``self`` for chaining.

        Known fields (``resource``, ``prefix``) are set directly; anything
        else lands in ``context.metadata``.
        """
        for key, value in kwargs.items():
            if key in ("resource", "prefix"):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging and JSON output."""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
            "context": self.context.to_dict(),
        }
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"


class ResourceReadError(SchemaSpineError):
    """Script content could not be opened, decoded or read."""

    default_category = ErrorCategory.STORAGE


class PlaceholderError(SchemaSpineError):
    """A placeholder token in a script has no configured value."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, placeholder: str, **kwargs: Any) -> None:
        super().__init__(
            f"No value provided for placeholder: {placeholder}. Check your configuration!",
            **kwargs,
        )
        self.placeholder = placeholder


class InvalidVersionError(SchemaSpineError):
    """A version string is not a valid migration version."""

    default_category = ErrorCategory.PARSE


class MigrationValidationError(SchemaSpineError):
    """A resolved migration is internally inconsistent."""

    default_category = ErrorCategory.VALIDATION


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SchemaSpineError",
    "ResourceReadError",
    "PlaceholderError",
    "InvalidVersionError",
    "MigrationValidationError",
]
