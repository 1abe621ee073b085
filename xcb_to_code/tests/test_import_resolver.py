"""
Tests for the import resolver.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from xcb_to_code.pipeline.analyzer import ImportResolver, load_document
from xcb_to_code.pipeline.errors import (
    DescriptionMalformedError,
    DescriptionNotFoundError,
    ImportMalformedError,
    ImportNotFoundError,
)

TEST_DATA = Path(__file__).parent / "test_data"


class TestImportResolver:
    """Tests for ImportResolver."""

    def test_import_path(self, tmp_path):
        resolver = ImportResolver(tmp_path)
        assert resolver.import_path("xproto") == tmp_path / "xproto.xml"

    def test_binds_imported_document(self):
        document = load_document(TEST_DATA / "randr.xml")
        ImportResolver(TEST_DATA).resolve_imports(document)

        imported = document.imports[0].document
        assert imported is not None
        assert imported.header == "xproto"
        assert document.imported_documents() == [imported]

    def test_nested_imports_stay_unbound(self):
        document = load_document(TEST_DATA / "composite.xml")
        ImportResolver(TEST_DATA).resolve_imports(document)

        randr = document.imports[0].document
        assert randr.header == "randr"
        assert randr.imports[0].name == "xproto"
        assert randr.imports[0].document is None

    def test_imported_enums_keep_missing_values(self):
        document = load_document(TEST_DATA / "randr.xml")
        ImportResolver(TEST_DATA).resolve_imports(document)

        map_state = document.imports[0].document.enums[1]
        assert map_state.name == "MapState"
        assert all(item.expression is None for item in map_state.items)

    def test_files_are_read_on_every_call(self):
        first = load_document(TEST_DATA / "randr.xml")
        second = load_document(TEST_DATA / "randr.xml")
        resolver = ImportResolver(TEST_DATA)
        resolver.resolve_imports(first)
        resolver.resolve_imports(second)
        assert first.imports[0].document is not second.imports[0].document

    def test_import_not_found(self):
        document = load_document(TEST_DATA / "missing_import.xml")
        with pytest.raises(ImportNotFoundError) as exc_info:
            ImportResolver(TEST_DATA).resolve_imports(document)

        error = exc_info.value
        assert isinstance(error, DescriptionNotFoundError)
        assert error.import_name == "nonexistent"
        assert error.path == str(TEST_DATA / "nonexistent.xml")
        assert str(error).startswith("Could not read X protocol description for import 'nonexistent'")

    def test_import_malformed(self):
        document = load_document(TEST_DATA / "imports_broken.xml")
        with pytest.raises(ImportMalformedError) as exc_info:
            ImportResolver(TEST_DATA).resolve_imports(document)

        error = exc_info.value
        assert isinstance(error, DescriptionMalformedError)
        assert error.import_name == "broken"
        assert "Invalid XML" in str(error)

    def test_import_with_invalid_encoding(self, tmp_path):
        (tmp_path / "garbled.xml").write_bytes(
            b'<?xml version="1.0" encoding="utf-8"?>\n<xcb header="garbled">\xff\xfe</xcb>\n'
        )
        (tmp_path / "root.xml").write_text(
            '<?xml version="1.0" encoding="utf-8"?>\n<xcb header="root">\n  <import>garbled</import>\n</xcb>\n',
            encoding="utf-8",
        )
        document = load_document(tmp_path / "root.xml")

        with pytest.raises(ImportMalformedError) as exc_info:
            ImportResolver(tmp_path).resolve_imports(document)

        error = exc_info.value
        assert error.import_name == "garbled"
        assert error.source_path == str(tmp_path / "garbled.xml")
        assert "Invalid XML" in str(error)

    def test_proto_path_is_separate_from_root(self, tmp_path):
        shutil.copy(TEST_DATA / "randr.xml", tmp_path / "randr.xml")
        document = load_document(tmp_path / "randr.xml")

        with pytest.raises(ImportNotFoundError):
            ImportResolver(tmp_path).resolve_imports(document)

        ImportResolver(TEST_DATA).resolve_imports(document)
        assert document.imports[0].document.header == "xproto"


if __name__ == "__main__":
    pytest.main([__file__])
