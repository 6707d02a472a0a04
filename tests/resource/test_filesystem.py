"""Tests for schemaspine.resource.filesystem."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from schemaspine.errors import ResourceReadError
from schemaspine.protocols import LoadableResource, ResourceProvider
from schemaspine.resource import FileSystemResource, FileSystemResourceProvider


class TestFileSystemResource:
    def test_metadata(self, tmp_path: Path):
        path = tmp_path / "nested" / "V1__init.sql"
        path.parent.mkdir()
        path.write_text("SELECT 1;", encoding="utf-8")
        resource = FileSystemResource(tmp_path, path)

        assert resource.filename == "V1__init.sql"
        assert resource.relative_path == "nested/V1__init.sql"
        assert resource.absolute_path == str(path.resolve())
        assert resource.absolute_path_on_disk == str(path.resolve())
        assert isinstance(resource, LoadableResource)

    def test_read_returns_fresh_stream(self, tmp_path: Path):
        path = tmp_path / "V1__init.sql"
        path.write_text("SELECT 1;", encoding="utf-8")
        resource = FileSystemResource(tmp_path, path)
        with resource.read() as first:
            assert first.read() == "SELECT 1;"
        with resource.read() as second:
            assert second.read() == "SELECT 1;"

    def test_encoding(self, tmp_path: Path):
        path = tmp_path / "V1__latin1.sql"
        path.write_bytes("SELECT 'é';".encode("latin-1"))
        with FileSystemResource(tmp_path, path, encoding="latin-1").read() as reader:
            assert reader.read() == "SELECT 'é';"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ResourceReadError) as exc_info:
            FileSystemResource(tmp_path, tmp_path / "V1__gone.sql").read()
        assert exc_info.value.context.resource == "V1__gone.sql"
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_unknown_encoding(self, tmp_path: Path):
        path = tmp_path / "V1__a.sql"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ResourceReadError, match="Unknown encoding"):
            FileSystemResource(tmp_path, path, encoding="no-such-codec").read()


class TestFileSystemResourceProvider:
    @pytest.fixture()
    def location(self, tmp_path: Path) -> Path:
        d = tmp_path / "sql"
        (d / "sub").mkdir(parents=True)
        for name in ("V2__b.sql", "V1__a.sql", "R__v.sql", "V3__c.txt", "afterMigrate.sql"):
            (d / name).write_text("SELECT 1;", encoding="utf-8")
        (d / "sub" / "V1_1__nested.sql").write_text("SELECT 1;", encoding="utf-8")
        (d / "Vdir.sql").mkdir()
        return d

    def test_is_a_resource_provider(self, location: Path):
        assert isinstance(FileSystemResourceProvider([location]), ResourceProvider)

    def test_filters_by_prefix_and_suffix(self, location: Path):
        provider = FileSystemResourceProvider([location])
        names = [r.relative_path for r in provider.get_resources("V", [".sql"])]
        assert names == ["V1__a.sql", "V2__b.sql", "sub/V1_1__nested.sql"]

    def test_multiple_suffixes(self, location: Path):
        provider = FileSystemResourceProvider([location])
        names = [r.filename for r in provider.get_resources("V", [".sql", ".txt"])]
        assert "V3__c.txt" in names

    def test_overlapping_locations_yield_no_duplicates(self, location: Path):
        provider = FileSystemResourceProvider([location, location / "sub"])
        paths = [r.absolute_path for r in provider.get_resources("V", [".sql"])]
        assert len(paths) == len(set(paths)) == 3

    def test_missing_location_warns_and_yields_nothing(self, tmp_path: Path):
        logger = MagicMock()
        provider = FileSystemResourceProvider([tmp_path / "nope"], logger=logger)
        assert provider.get_resources("V", [".sql"]) == []
        logger.warning.assert_called_once()
        assert logger.warning.call_args.kwargs["location"] == str(tmp_path / "nope")

    def test_get_resource(self, location: Path):
        provider = FileSystemResourceProvider([location])
        assert provider.get_resource("sub/V1_1__nested.sql").filename == "V1_1__nested.sql"
        assert provider.get_resource("V9__missing.sql") is None

    def test_encoding_is_passed_to_resources(self, location: Path):
        provider = FileSystemResourceProvider([location], encoding="latin-1")
        assert all(r.encoding == "latin-1" for r in provider.get_resources("R", [".sql"]))
