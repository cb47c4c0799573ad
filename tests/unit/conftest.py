"""
Pytest configuration for unit tests.

Provides builders for small DocBook documents shaped like the DICOM
standard's part files, and a complete input directory for end-to-end
runs.
"""

from pathlib import Path
from types import SimpleNamespace
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

import pytest

from dicom_dict_gen.config import AppConfig


HEADER_CELLS = ("Tag", "Name", "Keyword", "VR", "VM", "")


def build_table(table_id: str, rows: Sequence[Sequence[str]], caption: str = "") -> str:
    """Registry table with a <th> header row and one <tr> per row."""
    head = "".join(f"<th><para>{h}</para></th>" for h in HEADER_CELLS)
    body = "\n".join(
        "<tr>" + "".join(f"<td><para>{escape(cell)}</para></td>" for cell in row) + "</tr>"
        for row in rows
    )
    return (
        f'<table frame="box" rules="all" xml:id="{table_id}">\n'
        f"<caption>{escape(caption)}</caption>\n"
        f"<thead><tr>{head}</tr></thead>\n"
        f"<tbody>\n{body}\n</tbody>\n"
        f"</table>"
    )


def build_book(book_id: str, title: str, tables: Sequence[str]) -> str:
    """DocBook 5 <book> with every table in one chapter."""
    return (
        '<?xml version="1.0" encoding="utf-8" standalone="no"?>\n'
        '<book xmlns="http://docbook.org/ns/docbook" '
        'xmlns:xl="http://www.w3.org/1999/xlink" '
        f'label="{book_id}" version="5.0" xml:id="{book_id}">\n'
        f"<title>{escape(title)}</title>\n"
        '<chapter label="6" xml:id="chapter_6">\n'
        "<title>Registry</title>\n"
        + "\n".join(tables)
        + "\n</chapter>\n</book>\n"
    )


PART06_TABLES = {
    "table_6-1": [
        ["(0008,0001)", "Length to End", "LengthToEnd", "UL", "1", "RET"],
        ["(0010,0010)", "Patient's Name", "PatientName", "PN", "1", ""],
        ["(0010,0020)", "Patient ID", "PatientID", "LO", "1"],
        ["(4010,0001)", "Low Energy Detectors", "LowEnergyDetectors", "CS", "1", "DICOS"],
        ["(0008,0000)", "", "", "", "", ""],
    ],
    "table_7-1": [
        ["(0002,0000)", "File Meta Information Group Length",
         "FileMetaInformationGroupLength", "UL", "1"],
    ],
    "table_8-1": [
        ["(0004,1130)", "File-set ID", "FileSetID", "CS", "1"],
    ],
    "table_9-1": [
        ["(0006,0001)", "Current Frame Functional Groups Sequence",
         "CurrentFrameFunctionalGroupsSequence", "SQ", "1"],
    ],
}

PART07_TABLES = {
    "table_E.1-1": [
        ["(0000,0000)", "Command Group Length", "CommandGroupLength", "UL", "1"],
        ["(0000,0002)", "Affected SOP Class UID", "AffectedSOPClassUID", "UI", "1"],
    ],
    "table_E.2-1": [
        ["(0000,0001)", "Command Length to End", "CommandLengthToEnd", "UL", "1"],
    ],
}

EXPECTED_TAGS = [
    "(0000,0000)",
    "(0000,0001)",
    "(0000,0002)",
    "(0002,0000)",
    "(0004,1130)",
    "(0006,0001)",
    "(0008,0001)",
    "(0010,0010)",
    "(0010,0020)",
    "(4010,0001)",
]


def write_part(path: Path, book_id: str, tables: dict, skip: Optional[List[str]] = None) -> Path:
    skip = skip or []
    xml = build_book(
        book_id,
        f"{book_id}",
        [build_table(table_id, rows) for table_id, rows in tables.items() if table_id not in skip]
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(xml, encoding="utf-8")
    return path


def write_release_notes(path: Path, title: str = "DICOM Release Notes 2024b") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<book xmlns="http://docbook.org/ns/docbook" xml:id="releasenotes">\n'
        f"<title>{escape(title)}</title>\n"
        "<chapter><title>Changes</title></chapter>\n"
        "</book>\n",
        encoding="utf-8"
    )
    return path


@pytest.fixture
def config() -> AppConfig:
    """Configuration with defaults only."""
    return AppConfig()


@pytest.fixture
def write_xml(tmp_path):
    """Write an XML string to a file under tmp_path and return its path."""
    def _write(text: str, name: str = "doc.xml") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def standard_dir(tmp_path) -> Path:
    """
    Input directory laid out like the standard's DocBook distribution:

        source/docbook/part03/part03.xml   (unrelated part)
        source/docbook/part06/part06.xml   (PS3.6)
        source/docbook/part07/part07.xml   (PS3.7)
        source/docbook/releasenotes/releasenotes_2024b.xml
    """
    root = tmp_path / "source" / "docbook"
    write_part(root / "part03" / "part03.xml", "PS3.3", {
        "table_C.7-1": [["(0010,0010)", "Patient's Name", "PatientName", "PN", "1"]],
    })
    write_part(root / "part06" / "part06.xml", "PS3.6", PART06_TABLES)
    write_part(root / "part07" / "part07.xml", "PS3.7", PART07_TABLES)
    write_release_notes(root / "releasenotes" / "releasenotes_2024b.xml")
    (root / "part06" / "notes.txt").write_text("not xml", encoding="utf-8")
    return tmp_path / "source"


@pytest.fixture
def docbook() -> SimpleNamespace:
    """Document builders and the contents of the standard_dir fixture."""
    return SimpleNamespace(
        build_table=build_table,
        build_book=build_book,
        write_part=write_part,
        write_release_notes=write_release_notes,
        part06_tables=PART06_TABLES,
        part07_tables=PART07_TABLES,
        expected_tags=EXPECTED_TAGS,
    )
