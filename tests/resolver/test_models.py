"""Tests for ResolvedMigration and the ordering rule."""

from __future__ import annotations

import dataclasses

import pytest

from schemaspine.enums import MigrationType, ValidationPolicy
from schemaspine.errors import MigrationValidationError
from schemaspine.resolver.comparator import migration_sort_key, sort_migrations
from schemaspine.resolver.models import ResolvedMigration
from schemaspine.resolver.version import MigrationVersion


def make_migration(
    version: str | None,
    description: str = "desc",
    checksum: int = 1,
    equivalent_checksum: int | None = None,
    migration_type: MigrationType = MigrationType.SQL,
    executor: object = None,
) -> ResolvedMigration:
    return ResolvedMigration(
        version=MigrationVersion.from_version(version) if version else None,
        description=description,
        script=f"{version or 'R'}__{description}.sql",
        checksum=checksum,
        equivalent_checksum=equivalent_checksum,
        type=migration_type,
        physical_location=None,
        executor=executor,
    )


class TestResolvedMigration:
    def test_is_frozen(self):
        migration = make_migration("1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            migration.checksum = 2  # type: ignore[misc]

    def test_executor_excluded_from_equality(self):
        assert make_migration("1", executor=object()) == make_migration("1", executor=object())

    def test_is_repeatable(self):
        assert make_migration(None).is_repeatable is True
        assert make_migration("1").is_repeatable is False

    def test_validation_policy_follows_type(self):
        assert make_migration("1").validation_policy is ValidationPolicy.SKIP
        python = make_migration("1", migration_type=MigrationType.PYTHON)
        assert python.validation_policy is ValidationPolicy.STRICT

    def test_explicit_validation_policy_wins(self):
        migration = dataclasses.replace(make_migration("1"), validation_policy=ValidationPolicy.STRICT)
        assert migration.validation_policy is ValidationPolicy.STRICT

    def test_to_dict(self):
        migration = make_migration("1_2", "add_users", checksum=-5, equivalent_checksum=None)
        assert migration.to_dict() == {
            "version": "1.2",
            "description": "add_users",
            "script": "1_2__add_users.sql",
            "checksum": -5,
            "equivalent_checksum": None,
            "type": "SQL",
            "physical_location": None,
        }


class TestChecksumMatching:
    def test_matches_primary_or_equivalent(self):
        migration = make_migration(None, checksum=10, equivalent_checksum=20)
        assert migration.checksum_matches(10)
        assert migration.checksum_matches(20)
        assert not migration.checksum_matches(30)
        assert not migration.checksum_matches(None)

    def test_matches_without_being_identical(self):
        migration = make_migration(None, checksum=10, equivalent_checksum=20)
        assert migration.checksum_matches_without_being_identical(20)
        assert not migration.checksum_matches_without_being_identical(10)

    def test_no_equivalent_checksum(self):
        migration = make_migration("1", checksum=10)
        assert not migration.checksum_matches_without_being_identical(10)
        assert not migration.checksum_matches(None)


class TestValidate:
    def test_skip_policy_never_raises(self):
        make_migration(None, description="", executor=None).validate()

    def test_strict_requires_executor(self):
        migration = make_migration("1", migration_type=MigrationType.PYTHON)
        with pytest.raises(MigrationValidationError, match="no executor"):
            migration.validate()

    def test_strict_requires_description_for_repeatable(self):
        migration = make_migration(
            None, description="", migration_type=MigrationType.PYTHON, executor=object()
        )
        with pytest.raises(MigrationValidationError) as exc_info:
            migration.validate()
        assert exc_info.value.context.resource == "R__.sql"

    def test_strict_passes_when_consistent(self):
        make_migration("1", migration_type=MigrationType.PYTHON, executor=object()).validate()


class TestOrdering:
    def test_versioned_before_repeatable(self):
        ordered = sort_migrations(
            [make_migration(None, "a"), make_migration("99"), make_migration("1")]
        )
        assert [str(m.version) if m.version else m.description for m in ordered] == ["1", "99", "a"]

    def test_versions_are_piecewise(self):
        ordered = sort_migrations([make_migration(v) for v in ("2", "1.1", "1", "1.10", "1.9")])
        assert [str(m.version) for m in ordered] == ["1", "1.1", "1.9", "1.10", "2"]

    def test_repeatables_by_description(self):
        ordered = sort_migrations([make_migration(None, d) for d in ("beta", "alpha", "Zeta")])
        assert [m.description for m in ordered] == ["Zeta", "alpha", "beta"]

    def test_stable_for_equal_descriptions(self):
        first = make_migration(None, "same", checksum=1)
        second = make_migration(None, "same", checksum=2)
        assert [m.checksum for m in sort_migrations([first, second])] == [1, 2]
        assert [m.checksum for m in sort_migrations([second, first])] == [2, 1]

    def test_sort_key_shape(self):
        assert migration_sort_key(make_migration("1"))[0] == 0
        assert migration_sort_key(make_migration(None))[0] == 1
