"""
Extraction plan execution.

Runs an ExtractionPlan against one document with a single cursor:

    for each table step:
        find <table xml:id=...>   (fatal if missing)
        find <tbody>              (fatal if missing)
        repeat: find next <tr> before </tbody>, decode the row

A missing <tr> ends the table and is not an error. Any other missing
landmark aborts the run, since the document no longer has the shape the
plan was written for.

Also provides the two single-seek lookups used before extraction:
selecting the document for a part, and reading the edition label.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from dicom_dict_gen.config import AppConfig, get_app_config
from dicom_dict_gen.exceptions import (
    DocumentNotFoundError,
    LandmarkNotFound,
    MalformedDocumentError,
)
from dicom_dict_gen.models.data_item import DataItem
from dicom_dict_gen.models.plan import ExtractionPlan, TableStep
from dicom_dict_gen.parsers.cursor import Landmark, XmlCursor
from dicom_dict_gen.parsers.row_decoder import read_row

logger = logging.getLogger(__name__)

ID_ATTRIBUTE = "xml:id"

TABLE_BODY = Landmark("tbody", "td")
TABLE_ROW = Landmark("tr", "tbody")
EDITION_TITLE = Landmark("title", "title")


def table_landmark(table_id: str) -> Landmark:
    """Landmark for a table by xml:id, searched up to the end of the document."""
    return Landmark("table", "", (ID_ATTRIBUTE, table_id))


def part_landmark(part: str) -> Landmark:
    """Landmark for the <book> element of a part, given up at the first </title>."""
    return Landmark("book", "title", (ID_ATTRIBUTE, part))


def extract_table(
    cursor: XmlCursor,
    step: TableStep,
    config: Optional[AppConfig] = None
) -> List[DataItem]:
    """
    Extract all valid rows of one table.

    Raises:
        LandmarkNotFound: If the table or its body is missing
    """
    cursor.seek(table_landmark(step.table_id))
    cursor.seek(TABLE_BODY)

    items = []
    rows = 0
    while True:
        try:
            cursor.seek(TABLE_ROW)
        except LandmarkNotFound:
            break
        rows += 1
        item = read_row(cursor, step.version, config)
        if item is not None:
            items.append(item)

    logger.info(
        f"{step.table_id} ({step.title or 'untitled'}): "
        f"{len(items)} items from {rows} rows"
    )
    return items


def run_plan(
    cursor: XmlCursor,
    plan: ExtractionPlan,
    config: Optional[AppConfig] = None
) -> List[DataItem]:
    """
    Execute every table step of a plan, in order, on one cursor.

    Returns:
        Records of all tables, in document order

    Raises:
        LandmarkNotFound: If a required table or body is missing
    """
    items: List[DataItem] = []
    for step in plan.tables:
        items.extend(extract_table(cursor, step, config))
    return items


def find_document(
    paths: Iterable[Path],
    part: str,
    chunk_size: Optional[int] = None
) -> Path:
    """
    Select the document whose <book> carries xml:id == part.

    Each candidate is scanned with a fresh cursor; the first match wins.
    Candidates that are not well-formed XML are skipped with a warning.

    Raises:
        DocumentNotFoundError: If no candidate matches
    """
    chunk_size = chunk_size or get_app_config().chunk_size
    landmark = part_landmark(part)

    for path in paths:
        try:
            with XmlCursor.open(path, chunk_size) as cursor:
                cursor.seek(landmark)
        except LandmarkNotFound:
            continue
        except MalformedDocumentError as e:
            logger.warning(f"Skipping unreadable candidate for {part}: {e}")
            continue
        logger.info(f"Found {part} in {path}")
        return path

    raise DocumentNotFoundError(f"No document found for part {part}")


def read_edition(path: Optional[Path], chunk_size: Optional[int] = None) -> str:
    """
    Read the edition label (e.g. "2024b") from the release notes document.

    The label is the last word of the document's first <title>.

    Raises:
        DocumentNotFoundError: If there is no edition document or its
            title is empty
        LandmarkNotFound: If the document has no <title>
    """
    if path is None:
        raise DocumentNotFoundError("Release notes document not found")

    chunk_size = chunk_size or get_app_config().chunk_size

    with XmlCursor.open(path, chunk_size) as cursor:
        cursor.seek(EDITION_TITLE)
        title = cursor.read_text("title")

    words = title.split()
    if not words:
        raise DocumentNotFoundError(f"Empty title in release notes {path}")

    logger.info(f"Edition {words[-1]} from title {title!r}")
    return words[-1]


def extract_part(
    paths: Iterable[Path],
    plan: ExtractionPlan,
    config: Optional[AppConfig] = None
) -> List[DataItem]:
    """
    Select the document for a plan's part and run the plan on it.

    Raises:
        DocumentNotFoundError: If no document carries the part
        LandmarkNotFound: If a required table is missing
        MalformedDocumentError: If the selected document is malformed
    """
    config = config or get_app_config()
    path = find_document(paths, plan.part, config.chunk_size)

    with XmlCursor.open(path, config.chunk_size) as cursor:
        items = run_plan(cursor, plan, config)

    logger.info(f"{plan.part}: {len(items)} items from {path}")
    return items
