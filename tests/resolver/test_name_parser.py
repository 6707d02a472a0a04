"""Tests for the filename grammar (schemaspine.resolver.name_parser)."""

from __future__ import annotations

import pytest

from schemaspine.config import ResolverSettings
from schemaspine.resolver.name_parser import ResourceName, ResourceNameParser
from schemaspine.resolver.version import MigrationVersion


@pytest.fixture()
def parser() -> ResourceNameParser:
    return ResourceNameParser(ResolverSettings())


class TestVersioned:
    def test_versioned_name(self, parser):
        name = parser.parse("V1_2__add_users.sql")
        assert name.valid is True
        assert name.prefix == "V"
        assert name.version.parts == (1, 2)
        assert name.description == "add_users"
        assert name.suffix == ".sql"
        assert name.is_versioned and not name.is_repeatable

    @pytest.mark.parametrize(
        ("filename", "parts", "description"),
        [
            ("V1__Init.sql", (1,), "Init"),
            ("V1_1__AddTable.sql", (1, 1), "AddTable"),
            ("V2.5.10__big_change.sql", (2, 5, 10), "big_change"),
            ("V3__multi__separator.sql", (3,), "multi__separator"),
        ],
    )
    def test_version_and_description(self, parser, filename, parts, description):
        name = parser.parse(filename)
        assert name.valid
        assert name.version == MigrationVersion(parts)
        assert name.description == description

    def test_missing_version_is_invalid(self, parser):
        name = parser.parse("V__no_version.sql")
        assert name.valid is False
        assert "version" in name.validity_message.lower()

    def test_missing_separator_is_invalid(self, parser):
        assert parser.parse("V1.sql").valid is False
        assert parser.parse("V1_add.sql").valid is False

    def test_malformed_version_is_invalid_not_raised(self, parser):
        name = parser.parse("V1-2__bad.sql")
        assert name.valid is False
        assert name.version is None


class TestRepeatable:
    def test_repeatable_name(self, parser):
        name = parser.parse("R__refresh_view.sql")
        assert name.valid is True
        assert name.prefix == "R"
        assert name.version is None
        assert name.description == "refresh_view"
        assert name.is_repeatable

    def test_repeatable_with_version_is_invalid(self, parser):
        assert parser.parse("R1__view.sql").valid is False

    def test_repeatable_without_separator_is_invalid(self, parser):
        assert parser.parse("Rollback.sql").valid is False


class TestCallbacks:
    def test_event_without_description(self, parser):
        name = parser.parse("afterMigrate.sql")
        assert name.valid is True
        assert name.prefix == "afterMigrate"
        assert name.description == ""

    def test_event_with_description(self, parser):
        name = parser.parse("beforeEachMigrate__audit.sql")
        assert name.valid is True
        assert name.prefix == "beforeEachMigrate"
        assert name.description == "audit"

    def test_longest_event_id_wins(self, parser):
        assert parser.parse("afterMigrateError.sql").prefix == "afterMigrateError"
        assert parser.parse("afterEachMigrate.sql").prefix == "afterEachMigrate"


class TestInvalidInput:
    @pytest.mark.parametrize(
        "filename",
        [
            "README.md",
            "V1__init.txt",
            ".sql",
            "",
            "init.sql",
            "X1__init.sql",
            "V1__init.sql.bak",
            "V1\n__init.sql",
        ],
    )
    def test_never_raises(self, parser, filename):
        name = parser.parse(filename)
        assert isinstance(name, ResourceName)
        assert name.valid is False
        assert name.validity_message

    def test_invalid_name_carries_no_identity(self, parser):
        name = parser.parse("README.md")
        assert name.prefix == ""
        assert name.version is None
        assert name.description == ""


class TestCustomNaming:
    def test_custom_prefix_separator_and_suffixes(self):
        parser = ResourceNameParser(
            ResolverSettings(
                sql_migration_prefix="M",
                repeatable_sql_migration_prefix="RE",
                sql_migration_separator="-",
                sql_migration_suffixes=(".sql", ".pgsql"),
            )
        )
        versioned = parser.parse("M7-create.pgsql")
        assert versioned.valid
        assert versioned.version.parts == (7,)
        assert versioned.suffix == ".pgsql"

        repeatable = parser.parse("RE-views.sql")
        assert repeatable.valid
        assert repeatable.prefix == "RE"
        assert repeatable.version is None

    def test_longest_suffix_wins(self):
        parser = ResourceNameParser(
            ResolverSettings(sql_migration_suffixes=(".sql", ".conf.sql"))
        )
        name = parser.parse("V1__settings.conf.sql")
        assert name.suffix == ".conf.sql"
        assert name.description == "settings"
