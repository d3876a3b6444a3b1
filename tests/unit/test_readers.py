"""
Unit tests for the archive readers.
"""

import json
from pathlib import Path

import pytest

from momo_pipeline.batch.readers import ArchiveReader, JSONArchiveReader, XMLArchiveReader
from momo_pipeline.core.errors import ArchiveReadError


@pytest.mark.unit
class TestXMLArchiveReader:
    """Tests for XMLArchiveReader"""

    def test_reads_sample_archive(self, sample_archive):
        messages = XMLArchiveReader().read(sample_archive)

        assert len(messages) == 12
        first = messages[0]
        assert first.address == "M-Money"
        assert first.type == "1"
        assert first.body.startswith("You have received 2000 RWF from Jane Smith")
        assert first.readable_date == "10 May 2024 4:30:58 PM"
        assert first.contact_name == "(Unknown)"
        assert first.attributes["service_center"] == "+250788110381"

    def test_preserves_document_order(self, write_xml_archive):
        path = write_xml_archive([{"body": f"message {i}"} for i in range(5)])

        messages = XMLArchiveReader().read(path)

        assert [m.body for m in messages] == [f"message {i}" for i in range(5)]

    def test_missing_body_attribute(self, write_xml_archive):
        path = write_xml_archive([{"address": "M-Money", "type": "1"}])

        messages = XMLArchiveReader().read(path)

        assert messages[0].body is None

    def test_entities_are_unescaped(self, write_xml_archive):
        path = write_xml_archive([{"body": "Y'ello, A & B <ok> \"quoted\""}])

        assert XMLArchiveReader().read(path)[0].body == "Y'ello, A & B <ok> \"quoted\""

    def test_empty_archive(self, write_xml_archive):
        assert XMLArchiveReader().read(write_xml_archive([])) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(ArchiveReadError, match="not found") as exc_info:
            XMLArchiveReader().read(tmp_path / "missing.xml")

        assert exc_info.value.archive_path.endswith("missing.xml")

    def test_malformed_xml(self, tmp_path):
        path = tmp_path / "broken.xml"
        path.write_text("<smses><sms body='unterminated' </smses>", encoding="utf-8")

        with pytest.raises(ArchiveReadError, match="Malformed XML"):
            XMLArchiveReader().read(path)

    def test_rejects_foreign_root(self, tmp_path):
        path = tmp_path / "page.xml"
        path.write_text("<html><body>not an sms backup</body></html>", encoding="utf-8")

        with pytest.raises(ArchiveReadError, match="Root element must be <smses>"):
            XMLArchiveReader().read(path)

    def test_rejects_bare_sms_root(self, tmp_path):
        path = tmp_path / "single.xml"
        path.write_text("<sms address='M-Money' body='hello' />", encoding="utf-8")

        with pytest.raises(ArchiveReadError, match="found <sms>"):
            XMLArchiveReader().read(path)


@pytest.mark.unit
class TestJSONArchiveReader:
    """Tests for JSONArchiveReader"""

    def test_reads_list(self, tmp_path):
        path = tmp_path / "archive.json"
        path.write_text(json.dumps([
            {"address": "M-Money", "body": "first", "type": "1"},
            {"address": "M-Money", "body": "second"},
        ]), encoding="utf-8")

        messages = JSONArchiveReader().read(path)

        assert [m.body for m in messages] == ["first", "second"]
        assert messages[1].type == ""

    def test_reads_smses_object(self, tmp_path):
        path = tmp_path / "archive.json"
        path.write_text(json.dumps({"smses": [{"body": "only"}]}), encoding="utf-8")

        assert [m.body for m in JSONArchiveReader().read(path)] == ["only"]

    def test_rejects_non_list(self, tmp_path):
        path = tmp_path / "archive.json"
        path.write_text(json.dumps({"messages": []}), encoding="utf-8")

        with pytest.raises(ArchiveReadError, match="list of message objects"):
            JSONArchiveReader().read(path)

    def test_rejects_non_object_items(self, tmp_path):
        path = tmp_path / "archive.json"
        path.write_text(json.dumps(["not an object"]), encoding="utf-8")

        with pytest.raises(ArchiveReadError):
            JSONArchiveReader().read(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "archive.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(ArchiveReadError, match="Malformed JSON"):
            JSONArchiveReader().read(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ArchiveReadError, match="not found"):
            JSONArchiveReader().read(tmp_path / "missing.json")


@pytest.mark.unit
class TestArchiveReader:
    """Tests for format dispatch"""

    def test_infers_xml(self, sample_archive):
        assert len(ArchiveReader().read(sample_archive)) == 12

    def test_infers_json(self, tmp_path):
        path = tmp_path / "archive.JSON"
        path.write_text(json.dumps([{"body": "x"}]), encoding="utf-8")

        assert len(ArchiveReader().read(path)) == 1

    def test_unknown_suffix_defaults_to_xml(self, tmp_path, write_xml_archive):
        source = write_xml_archive([{"body": "x"}])
        path = tmp_path / "backup.dat"
        path.write_text(Path(source).read_text(encoding="utf-8"), encoding="utf-8")

        assert len(ArchiveReader().read(path)) == 1

    def test_explicit_format_wins(self, tmp_path):
        path = tmp_path / "archive.xml"
        path.write_text(json.dumps([{"body": "x"}]), encoding="utf-8")

        assert len(ArchiveReader().read(path, file_format="json")) == 1

    def test_unsupported_format(self, sample_archive):
        with pytest.raises(ValueError, match="Unsupported archive format"):
            ArchiveReader().read(sample_archive, file_format="csv")
