"""
Shared enums for schemaspine.

STDLIB ONLY - NO PYDANTIC.
"""

from __future__ import annotations

from enum import Enum


class MigrationType(str, Enum):
    """Kind of script a resolved migration was built from."""

    SQL = "SQL"
    PYTHON = "PYTHON"


class LogLevel(str, Enum):
    """Log levels accepted by ``--log-level``."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ValidationPolicy(str, Enum):
    """
    How ``ResolvedMigration.validate()`` treats a descriptor.

    SQL migrations are fully described by their file, so there is nothing
    left to check once they are resolved; they use ``SKIP``. Migrations
    backed by code (``PYTHON``) use ``STRICT``.
    """

    STRICT = "strict"
    SKIP = "skip"

    @classmethod
    def for_type(cls, migration_type: MigrationType) -> ValidationPolicy:
        if migration_type == MigrationType.SQL:
            return cls.SKIP
        return cls.STRICT


class Event(str, Enum):
    """
    Lifecycle events a callback script can hook into.

    The value is the id used as a filename prefix, e.g.
    ``afterMigrate.sql`` or ``beforeEachMigrate__log.sql``.
    """

    # Migrate
    BEFORE_MIGRATE = "beforeMigrate"
    BEFORE_REPEATABLES = "beforeRepeatables"
    BEFORE_EACH_MIGRATE = "beforeEachMigrate"
    BEFORE_EACH_MIGRATE_STATEMENT = "beforeEachMigrateStatement"
    AFTER_EACH_MIGRATE_STATEMENT = "afterEachMigrateStatement"
    AFTER_EACH_MIGRATE_STATEMENT_ERROR = "afterEachMigrateStatementError"
    AFTER_EACH_MIGRATE = "afterEachMigrate"
    AFTER_EACH_MIGRATE_ERROR = "afterEachMigrateError"
    AFTER_MIGRATE = "afterMigrate"
    AFTER_MIGRATE_APPLIED = "afterMigrateApplied"
    AFTER_VERSIONED = "afterVersioned"
    AFTER_MIGRATE_ERROR = "afterMigrateError"

    # Clean
    BEFORE_CLEAN = "beforeClean"
    AFTER_CLEAN = "afterClean"
    AFTER_CLEAN_ERROR = "afterCleanError"

    # Info
    BEFORE_INFO = "beforeInfo"
    AFTER_INFO = "afterInfo"
    AFTER_INFO_ERROR = "afterInfoError"

    # Validate
    BEFORE_VALIDATE = "beforeValidate"
    AFTER_VALIDATE = "afterValidate"
    AFTER_VALIDATE_ERROR = "afterValidateError"

    # Baseline
    BEFORE_BASELINE = "beforeBaseline"
    AFTER_BASELINE = "afterBaseline"
    AFTER_BASELINE_ERROR = "afterBaselineError"

    # Repair
    BEFORE_REPAIR = "beforeRepair"
    AFTER_REPAIR = "afterRepair"
    AFTER_REPAIR_ERROR = "afterRepairError"

    # Schema creation
    CREATE_SCHEMA = "createSchema"

    @classmethod
    def from_id(cls, event_id: str) -> Event | None:
        """Return the event whose id matches exactly, or ``None``."""
        for event in cls:
            if event.value == event_id:
                return event
        return None

    @classmethod
    def ids(cls) -> list[str]:
        return [event.value for event in cls]


__all__ = ["MigrationType", "LogLevel", "ValidationPolicy", "Event"]
