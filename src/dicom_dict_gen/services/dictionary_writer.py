"""
Dictionary file assembly.

Sorts the collected records, fills in the header template and writes
the tab-delimited dictionary:

    <header>
    TAG<TAB>"NAME"<TAB>KEYWORD<TAB>VR<TAB>VM<TAB>VERSION
    ...

The file is UTF-8, lines are separated by a single newline and there is
no newline after the last record.
"""

import getpass
import logging
import socket
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Union

from dicom_dict_gen.config import DEFAULT_HEADER_PATH
from dicom_dict_gen.exceptions import HeaderTemplateError
from dicom_dict_gen.models.data_item import DataItem

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# placeholder -> maximum number of replacements
PLACEHOLDERS = {
    "${DICOM_VERSION}": 2,
    "${DATE}": 1,
    "${USER}": 1,
    "${HOST}": 1,
}


def load_header_template(path: Optional[Union[str, Path]] = None) -> str:
    """
    Read a header template.

    Args:
        path: Custom template file; the packaged default when None

    Raises:
        OSError: If the file cannot be read
        HeaderTemplateError: If the file is not valid UTF-8
    """
    template_path = Path(path) if path else DEFAULT_HEADER_PATH
    try:
        with open(template_path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise HeaderTemplateError(template_path, str(e)) from e


def sort_items(items: Iterable[DataItem]) -> List[DataItem]:
    """Stable sort by tag text."""
    return sorted(items, key=lambda item: item.tag)


def render_header(
    template: str,
    version: str,
    now: datetime,
    user: str,
    host: str
) -> str:
    """
    Substitute the known placeholders of a header template.

    ${DICOM_VERSION} is replaced at most twice, the others at most once.
    Unknown placeholders are left as they are. ${DATE} is rendered in UTC;
    a naive `now` is taken to be UTC already.

    Example:
        >>> render_header("v${DICOM_VERSION} ${FOO}", "2024b", now, "me", "box")
        'v2024b ${FOO}'
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    values = {
        "${DICOM_VERSION}": version,
        "${DATE}": now.astimezone(timezone.utc).strftime(DATE_FORMAT),
        "${USER}": user,
        "${HOST}": host,
    }
    header = template
    for placeholder, count in PLACEHOLDERS.items():
        header = header.replace(placeholder, values[placeholder], count)
    return header


def current_user() -> str:
    """Login name of the invoking user, or "unknown"."""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


class DictionaryWriter:
    """
    Writes the final dictionary file.

    Usage:
        >>> writer = DictionaryWriter()
        >>> writer.write_dictionary("dicom.dic", items, template, "2024b")
    """

    def __init__(self, user: Optional[str] = None, host: Optional[str] = None):
        """
        Args:
            user: User name for ${USER} (login name when None)
            host: Host name for ${HOST} (socket.gethostname() when None)
        """
        self.user = user or current_user()
        self.host = host or socket.gethostname()

    def format(
        self,
        items: Iterable[DataItem],
        template: str,
        version: str,
        now: Optional[datetime] = None
    ) -> str:
        """Build the complete file content."""
        now = now or datetime.now(timezone.utc)
        header = render_header(template, version, now, self.user, self.host)
        lines = [item.to_line() for item in sort_items(items)]
        return header + "\n" + "\n".join(lines)

    def write_dictionary(
        self,
        output_path: Union[str, Path],
        items: Iterable[DataItem],
        template: str,
        version: str,
        now: Optional[datetime] = None
    ) -> Path:
        """
        Write the dictionary, replacing any existing file.

        Returns:
            Path of the written file

        Raises:
            OSError: If the file cannot be written
        """
        items = list(items)
        content = self.format(items, template, version, now)

        output_path = Path(output_path)
        with open(output_path, 'w', encoding='utf-8', newline='\n') as f:
            f.write(content)

        logger.info(f"Wrote {len(items)} items to {output_path}")
        return output_path
