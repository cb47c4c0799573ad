"""
Forward-only XML cursor.

The cursor holds a single position in one document's token stream.
Every seek starts exactly where the previous one stopped and nothing is
ever rewound, so a sequence of seeks must follow document order.

A seek is bounded by the next end tag named by the landmark instead of a
nesting depth counter. This is only correct while the sought element
never nests inside itself before that boundary, which holds for the
registry tables of the standard.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from dicom_dict_gen.exceptions import LandmarkNotFound
from dicom_dict_gen.parsers.tokens import (
    DEFAULT_CHUNK_SIZE,
    EndElement,
    EndOfStream,
    StartElement,
    Text,
    Token,
    iter_tokens,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Landmark:
    """
    Seek target.

    Attributes:
        start_tag: Element name to find
        boundary_tag: End tag that stops the search ("" = end of stream only)
        attribute: Optional (name, value) pair the element must carry

    Example:
        >>> Landmark("tr", "tbody")
        >>> Landmark("table", "", ("xml:id", "table_6-1"))
    """
    start_tag: str
    boundary_tag: str = ""
    attribute: Optional[Tuple[str, str]] = None

    def matches(self, token: StartElement) -> bool:
        """Check whether a start tag satisfies this landmark."""
        if token.name != self.start_tag:
            return False
        if self.attribute is None:
            return True
        return self.attribute in token.attributes

    def describe(self) -> str:
        """Render the landmark for error messages."""
        if self.attribute is None:
            return f"<{self.start_tag}>"
        key, value = self.attribute
        return f'<{self.start_tag} ... {key} = "{value}">'


class XmlCursor:
    """
    Single forward-only position over a token stream.

    Usage:
        >>> with XmlCursor.open("part06.xml") as cursor:
        ...     cursor.seek(Landmark("table", "", ("xml:id", "table_6-1")))
        ...     cursor.seek(Landmark("tbody", "td"))

    Context Manager:
        Leaving the block closes the underlying token stream (and file).
    """

    def __init__(self, tokens: Iterable[Token], source: Optional[Path] = None):
        """
        Args:
            tokens: Token sequence to consume
            source: Path the tokens come from, for logging
        """
        self._tokens = iter(tokens)
        self._exhausted = False
        self.source = source

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> 'XmlCursor':
        """Create a cursor over a file's tokens."""
        path = Path(path)
        return cls(iter_tokens(path, chunk_size), source=path)

    @property
    def exhausted(self) -> bool:
        """True once the end of the stream has been reached."""
        return self._exhausted

    def _next_token(self) -> Token:
        if self._exhausted:
            return EndOfStream()
        token = next(self._tokens, None)
        if token is None or isinstance(token, EndOfStream):
            self._exhausted = True
            return EndOfStream()
        return token

    def seek(self, landmark: Landmark) -> None:
        """
        Advance until the landmark's start tag is found.

        On success the cursor sits just past the matched start tag.
        Same-named elements without the required attribute are skipped.

        Raises:
            LandmarkNotFound: If the boundary end tag or the end of the
                stream is reached first
        """
        while True:
            token = self._next_token()
            if isinstance(token, StartElement):
                if landmark.matches(token):
                    return
            elif isinstance(token, EndElement):
                if token.name == landmark.boundary_tag:
                    raise LandmarkNotFound(landmark)
            elif isinstance(token, EndOfStream):
                raise LandmarkNotFound(landmark)

    def read_text(self, end_tag: str) -> str:
        """
        Collect text up to the end tag named `end_tag`.

        Text of nested elements is included. The result is stripped of
        surrounding whitespace; stops early at the end of the stream.
        """
        parts = []
        while True:
            token = self._next_token()
            if isinstance(token, Text):
                parts.append(token.text)
            elif isinstance(token, EndElement):
                if token.name == end_tag:
                    break
            elif isinstance(token, EndOfStream):
                break
        return ''.join(parts).strip()

    def close(self) -> None:
        """Release the token stream."""
        close = getattr(self._tokens, 'close', None)
        if close is not None:
            close()
        self._exhausted = True

    def __enter__(self) -> 'XmlCursor':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
