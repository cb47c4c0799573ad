"""
Unit tests for extraction plan execution, document selection and
edition label parsing.
"""

import pytest

from dicom_dict_gen.exceptions import DocumentNotFoundError, LandmarkNotFound
from dicom_dict_gen.models.plan import ExtractionPlan, TableStep
from dicom_dict_gen.parsers.cursor import XmlCursor
from dicom_dict_gen.parsers.plan_runner import (
    extract_part,
    extract_table,
    find_document,
    read_edition,
    run_plan,
)


PS36_PLAN = ExtractionPlan(
    part="PS3.6",
    tables=[
        TableStep(table_id="table_6-1"),
        TableStep(table_id="table_7-1"),
        TableStep(table_id="table_8-1"),
        TableStep(table_id="table_9-1"),
    ],
)


@pytest.fixture
def part06(tmp_path, docbook):
    return docbook.write_part(tmp_path / "part06.xml", "PS3.6", docbook.part06_tables)


class TestExtractTable:
    """Test extract_table()."""

    def test_two_row_table_missing_vm_yields_one_record(self, tmp_path, docbook, config):
        """Row 2 has no VM cell, so only row 1 becomes a record."""
        path = docbook.write_part(tmp_path / "doc.xml", "PS3.6", {
            "table_6-1": [
                ["(0010,0010)", "Patient's Name", "PatientName", "PN", "1"],
                ["(0010,0020)", "Patient ID", "PatientID", "LO"],
            ],
        })

        with XmlCursor.open(path) as cursor:
            items = extract_table(cursor, TableStep(table_id="table_6-1"), config)

        assert [item.keyword for item in items] == ["PatientName"]

    def test_header_and_invalid_rows_skipped(self, part06, config):
        with XmlCursor.open(part06) as cursor:
            items = extract_table(cursor, TableStep(table_id="table_6-1"), config)

        assert [item.tag for item in items] == [
            "(0008,0001)", "(0010,0010)", "(0010,0020)", "(4010,0001)",
        ]
        assert [item.version for item in items] == ["Ret", "DICOM", "DICOM", "DICOS"]

    def test_forced_version(self, tmp_path, docbook, config):
        path = docbook.write_part(tmp_path / "doc.xml", "PS3.7", docbook.part07_tables)

        with XmlCursor.open(path) as cursor:
            extract_table(cursor, TableStep(table_id="table_E.1-1"), config)
            retired = extract_table(cursor, TableStep(table_id="table_E.2-1", version="Ret"), config)

        assert [(item.tag, item.version) for item in retired] == [("(0000,0001)", "Ret")]

    def test_empty_table_body(self, tmp_path, docbook, config):
        path = docbook.write_part(tmp_path / "doc.xml", "PS3.6", {"table_6-1": []})

        with XmlCursor.open(path) as cursor:
            assert extract_table(cursor, TableStep(table_id="table_6-1"), config) == []

    def test_missing_table_is_fatal(self, part06, config):
        with XmlCursor.open(part06) as cursor:
            with pytest.raises(LandmarkNotFound, match="table_6-9"):
                extract_table(cursor, TableStep(table_id="table_6-9"), config)

    def test_missing_body_is_fatal(self, write_xml, config):
        path = write_xml(
            '<book><table xml:id="table_6-1"><thead><tr><td>Tag</td></tr></thead>'
            '</table></book>'
        )

        with XmlCursor.open(path) as cursor:
            with pytest.raises(LandmarkNotFound, match="<tbody>"):
                extract_table(cursor, TableStep(table_id="table_6-1"), config)


class TestRunPlan:
    """Test run_plan()."""

    def test_runs_tables_in_order(self, part06, config):
        with XmlCursor.open(part06) as cursor:
            items = run_plan(cursor, PS36_PLAN, config)

        assert [item.tag for item in items] == [
            "(0008,0001)", "(0010,0010)", "(0010,0020)", "(4010,0001)",
            "(0002,0000)", "(0004,1130)", "(0006,0001)",
        ]

    def test_out_of_order_plan_fails(self, part06, config):
        """The cursor never rewinds, so a table listed after a later one is not found."""
        plan = ExtractionPlan(
            part="PS3.6",
            tables=[TableStep(table_id="table_7-1"), TableStep(table_id="table_6-1")],
        )

        with XmlCursor.open(part06) as cursor:
            with pytest.raises(LandmarkNotFound, match="table_6-1"):
                run_plan(cursor, plan, config)


class TestFindDocument:
    """Test document selection by part identifier."""

    def test_selects_by_content(self, tmp_path, docbook):
        part03 = docbook.write_part(tmp_path / "a.xml", "PS3.3", {"table_C.7-1": []})
        part06 = docbook.write_part(tmp_path / "b.xml", "PS3.6", {"table_6-1": []})
        part07 = docbook.write_part(tmp_path / "c.xml", "PS3.7", {"table_E.1-1": []})

        assert find_document([part03, part06, part07], "PS3.6") == part06
        assert find_document([part07, part03, part06], "PS3.7") == part07

    def test_first_match_wins(self, tmp_path, docbook):
        first = docbook.write_part(tmp_path / "a.xml", "PS3.6", {"table_6-1": []})
        second = docbook.write_part(tmp_path / "b.xml", "PS3.6", {"table_6-1": []})

        assert find_document([first, second], "PS3.6") == first

    def test_id_after_title_not_matched(self, write_xml):
        """The search gives up at the first </title>."""
        path = write_xml(
            '<book xml:id="PS3.3"><title>PS3.3</title><book xml:id="PS3.6"/></book>'
        )

        with pytest.raises(DocumentNotFoundError):
            find_document([path], "PS3.6")

    def test_malformed_candidate_skipped(self, tmp_path, docbook, write_xml):
        broken = write_xml('<book xml:id="PS3.3"><title>', name="broken.xml")
        part06 = docbook.write_part(tmp_path / "b.xml", "PS3.6", {"table_6-1": []})

        assert find_document([broken, part06], "PS3.6") == part06

    def test_candidate_broken_after_book_id_selected(self, write_xml):
        path = write_xml(
            '<book xml:id="PS3.6"><title>PS3.6</title><chapter><para></chapter></book>'
        )

        assert find_document([path], "PS3.6") == path

    def test_no_match_raises(self, tmp_path, docbook):
        part03 = docbook.write_part(tmp_path / "a.xml", "PS3.3", {"table_C.7-1": []})

        with pytest.raises(DocumentNotFoundError, match="PS3.6"):
            find_document([part03], "PS3.6")

    def test_no_candidates_raises(self):
        with pytest.raises(DocumentNotFoundError):
            find_document([], "PS3.6")


class TestReadEdition:
    """Test edition label parsing."""

    def test_last_word_of_title(self, tmp_path, docbook):
        path = docbook.write_release_notes(tmp_path / "notes.xml", "DICOM Release Notes 2024b")

        assert read_edition(path) == "2024b"

    def test_single_word_title(self, tmp_path, docbook):
        path = docbook.write_release_notes(tmp_path / "notes.xml", "2023e")

        assert read_edition(path) == "2023e"

    def test_empty_title_raises(self, tmp_path, docbook):
        path = docbook.write_release_notes(tmp_path / "notes.xml", "   ")

        with pytest.raises(DocumentNotFoundError):
            read_edition(path)

    def test_missing_title_raises(self, write_xml):
        path = write_xml('<book><chapter/></book>')

        with pytest.raises(LandmarkNotFound, match="<title>"):
            read_edition(path)

    def test_title_before_syntax_error(self, write_xml):
        """The label is read even if the document breaks after the title."""
        path = write_xml(
            '<book><title>DICOM Release Notes 2024b</title>'
            '<chapter><para>broken</chapter></book>'
        )

        assert read_edition(path) == "2024b"

    def test_no_document_raises(self):
        with pytest.raises(DocumentNotFoundError):
            read_edition(None)


class TestExtractPart:
    """Test extract_part()."""

    def test_selects_and_extracts(self, tmp_path, docbook, config):
        part03 = docbook.write_part(tmp_path / "a.xml", "PS3.3", {"table_6-1": [
            ["(9999,9999)", "Wrong", "Wrong", "UN", "1"],
        ]})
        part06 = docbook.write_part(tmp_path / "b.xml", "PS3.6", docbook.part06_tables)

        items = extract_part([part03, part06], PS36_PLAN, config)

        assert len(items) == 7
        assert "(9999,9999)" not in [item.tag for item in items]

    def test_missing_table_in_selected_document(self, tmp_path, docbook, config):
        part06 = docbook.write_part(tmp_path / "b.xml", "PS3.6", docbook.part06_tables,
                                    skip=["table_8-1"])

        with pytest.raises(LandmarkNotFound, match="table_8-1"):
            extract_part([part06], PS36_PLAN, config)
