"""
Error types raised while generating the data dictionary.

Every error here is fatal for the whole run. Rows that do not carry a full
record are not errors: the row decoder drops them without raising.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from dicom_dict_gen.parsers.cursor import Landmark


class DictGenError(Exception):
    """Base class for all dictionary generator errors."""


class ArgumentError(DictGenError):
    """Raised for missing or invalid command-line arguments."""


class LandmarkNotFound(DictGenError):
    """
    A required XML element was not found before its boundary.

    Attributes:
        landmark: The Landmark that was being sought
    """

    def __init__(self, landmark: 'Landmark'):
        self.landmark = landmark
        super().__init__(f"Xml element {landmark.describe()} not found")


class DocumentNotFoundError(DictGenError):
    """Raised when no input document matches a required part or edition."""


class MalformedDocumentError(DictGenError):
    """
    Raised when an XML document cannot be tokenized.

    Attributes:
        path: Path of the offending document
    """

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        message = f"Malformed XML document: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class HeaderTemplateError(DictGenError):
    """
    Raised when a header template cannot be decoded as UTF-8.

    Attributes:
        path: Path of the template file
    """

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        message = f"Header template is not valid UTF-8: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
