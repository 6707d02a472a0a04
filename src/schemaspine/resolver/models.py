"""Resolved migration descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from schemaspine.enums import MigrationType, ValidationPolicy
from schemaspine.errors import MigrationValidationError
from schemaspine.resolver.version import MigrationVersion


@dataclass(frozen=True)
class ResolvedMigration:
    """A migration ready for validation and execution.

    ``checksum`` fingerprints the content as it will be executed.
    ``equivalent_checksum`` fingerprints the raw source and is only set for
    repeatable migrations resolved with placeholder replacement enabled.

    The execution handle is opaque and excluded from equality, so two
    resolutions of the same scripts compare equal.
    """

    version: MigrationVersion | None
    description: str
    script: str
    checksum: int
    equivalent_checksum: int | None
    type: MigrationType
    physical_location: str | None
    executor: Any = field(default=None, compare=False, repr=False)
    validation_policy: ValidationPolicy | None = None

    def __post_init__(self) -> None:
        if self.validation_policy is None:
            object.__setattr__(
                self, "validation_policy", ValidationPolicy.for_type(self.type)
            )

    @property
    def is_repeatable(self) -> bool:
        return self.version is None

    def checksum_matches(self, checksum: int | None) -> bool:
        """True if ``checksum`` equals either the primary or the equivalent checksum."""
        if checksum is None:
            return False
        return checksum == self.checksum or (
            self.equivalent_checksum is not None and checksum == self.equivalent_checksum
        )

    def checksum_matches_without_being_identical(self, checksum: int | None) -> bool:
        """True if only the raw source matches, i.e. placeholder values changed."""
        return (
            checksum is not None
            and checksum != self.checksum
            and self.equivalent_checksum is not None
            and checksum == self.equivalent_checksum
        )

    def validate(self) -> None:
        """Check internal consistency according to ``validation_policy``."""
        if self.validation_policy is ValidationPolicy.SKIP:
            return
        if self.checksum is None:
            raise MigrationValidationError(
                f"Migration {self.script} has no checksum"
            ).with_context(resource=self.script)
        if self.is_repeatable and not self.description:
            raise MigrationValidationError(
                f"Repeatable migration {self.script} has no description"
            ).with_context(resource=self.script)
        if self.executor is None:
            raise MigrationValidationError(
                f"Migration {self.script} has no executor"
            ).with_context(resource=self.script)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": str(self.version) if self.version is not None else None,
            "description": self.description,
            "script": self.script,
            "checksum": self.checksum,
            "equivalent_checksum": self.equivalent_checksum,
            "type": self.type.value,
            "physical_location": self.physical_location,
        }
