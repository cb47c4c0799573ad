"""
Input file discovery.

Walks the input directory for XML files and sets aside the release
notes document, which carries the edition label. Which of the remaining
documents holds which part is decided later by content, not by name.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


@dataclass
class DiscoveredFiles:
    """Result of scanning the input directory."""
    documents: List[Path] = field(default_factory=list)
    edition_document: Optional[Path] = None


def discover_xml_files(
    input_dir: Union[str, Path],
    suffix: str = ".xml",
    edition_marker: str = "releasenotes"
) -> DiscoveredFiles:
    """
    Recursively collect candidate XML documents.

    Every regular file whose path ends with `suffix` is a candidate. A
    candidate whose path contains `edition_marker` becomes the edition
    document (the last one found wins); the others are kept in traversal
    order. Directories are visited in sorted order.

    Args:
        input_dir: Directory to scan
        suffix: Required path suffix
        edition_marker: Substring identifying the release notes document

    Returns:
        DiscoveredFiles with documents and edition_document

    Raises:
        FileNotFoundError: If input_dir does not exist
        NotADirectoryError: If input_dir is not a directory
    """
    root = Path(input_dir)
    if not root.exists():
        raise FileNotFoundError(f"Input directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Input path is not a directory: {root}")

    result = DiscoveredFiles()

    def _raise(error: OSError) -> None:
        raise error

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            text = str(path)
            if not text.endswith(suffix) or not path.is_file():
                continue
            if edition_marker in text:
                if result.edition_document is not None:
                    logger.warning(
                        f"Multiple edition documents: {result.edition_document} replaced by {path}"
                    )
                result.edition_document = path
            else:
                result.documents.append(path)

    logger.info(
        f"Found {len(result.documents)} documents in {root}, "
        f"edition document: {result.edition_document}"
    )
    return result
