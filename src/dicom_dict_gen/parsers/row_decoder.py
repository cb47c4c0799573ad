"""
Row decoder for registry tables.

Cells are mapped to record fields by position, not by header name.
Registry tables of the standard use the column order:

    0 tag | 1 name | 2 keyword | 3 VR | 4 VM | 5 version hint (optional)

Cells past the version hint are read and discarded so the cursor ends
up after the row.
"""

import logging
from typing import Iterable, Optional

from dicom_dict_gen.config import AppConfig, get_app_config
from dicom_dict_gen.exceptions import LandmarkNotFound
from dicom_dict_gen.models.data_item import DataItem
from dicom_dict_gen.parsers.cursor import Landmark, XmlCursor

logger = logging.getLogger(__name__)

FIELD_SLOTS = ('tag', 'name', 'keyword', 'vr', 'vm')
VERSION_HINT_INDEX = len(FIELD_SLOTS)
REQUIRED_FIELDS = ('name', 'keyword', 'vr', 'vm')

CELL = Landmark("td", "tr")

RETIRED_PREFIX = "RET"


def resolve_version(
    hint: str,
    current: str,
    retired_version: str,
    alternate_standards: Iterable[str]
) -> str:
    """
    Apply the version hint of a row.

    Args:
        hint: Text of the version hint cell
        current: Version the row would otherwise get
        retired_version: Label used for retired rows
        alternate_standards: Standard names copied verbatim

    Returns:
        retired_version if the hint starts with RET, the hint itself if it
        names an alternate standard, `current` otherwise

    Example:
        >>> resolve_version("RET - See Note", "DICOM", "Ret", ["DICOS"])
        'Ret'
        >>> resolve_version("DICOS", "DICOM", "Ret", ["DICOS"])
        'DICOS'
    """
    if hint.startswith(RETIRED_PREFIX):
        return retired_version
    if hint in alternate_standards:
        return hint
    return current


def read_row(
    cursor: XmlCursor,
    version: Optional[str] = None,
    config: Optional[AppConfig] = None
) -> Optional[DataItem]:
    """
    Decode the cells of the current row into a DataItem.

    The cursor must sit just past a <tr> start tag. Cells are read until
    the row's </tr>.

    Args:
        cursor: Cursor positioned inside a row
        version: Version label for the row (config default when empty)
        config: Configuration (global config when None)

    Returns:
        DataItem, or None if name, keyword, VR or VM is empty
    """
    config = config or get_app_config()

    fields = dict.fromkeys(FIELD_SLOTS, '')
    row_version = version or config.default_version
    index = 0

    while True:
        try:
            cursor.seek(CELL)
        except LandmarkNotFound:
            break

        value = cursor.read_text("td")
        if index < VERSION_HINT_INDEX:
            fields[FIELD_SLOTS[index]] = value
        elif index == VERSION_HINT_INDEX:
            row_version = resolve_version(
                value,
                row_version,
                config.retired_version,
                config.alternate_standards
            )
        index += 1

    missing = [name for name in REQUIRED_FIELDS if not fields[name]]
    if missing:
        logger.debug(f"Dropping row {fields['tag']!r} ({index} cells), empty: {missing}")
        return None

    return DataItem(version=row_version, **fields)
