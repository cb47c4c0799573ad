"""
Streaming XML token source.

Turns an XML file into a flat, forward-only sequence of tokens without
building a document tree. lxml's feed parser is driven with a parser
target, so at most one chunk's worth of events is held in memory.

Name handling:
- Element names are reported by local name ({ns}table -> table)
- Attributes in the XML namespace keep the xml: prefix (xml:id)
- Other attributes are reported by local name
"""

import logging
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Deque, Dict, Iterator, Optional, Tuple, Union

from lxml import etree

from dicom_dict_gen.exceptions import MalformedDocumentError

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class StartElement:
    """Opening tag with its attributes as (name, value) pairs."""
    name: str
    attributes: Tuple[Tuple[str, str], ...] = ()


@dataclass(frozen=True)
class EndElement:
    """Closing tag."""
    name: str


@dataclass(frozen=True)
class Text:
    """Character data between tags (entities already resolved)."""
    text: str


@dataclass(frozen=True)
class EndOfStream:
    """Marks the end of the document."""


Token = Union[StartElement, EndElement, Text, EndOfStream]


def qualified_name(name: str) -> str:
    """
    Convert an lxml Clark-notation name to the name written in the source.

    Example:
        >>> qualified_name('{http://docbook.org/ns/docbook}table')
        'table'
        >>> qualified_name('{http://www.w3.org/XML/1998/namespace}id')
        'xml:id'
    """
    if not name.startswith('{'):
        return name
    uri, local = name[1:].split('}', 1)
    if uri == XML_NAMESPACE:
        return f"xml:{local}"
    return local


class _TokenCollector:
    """lxml parser target that queues tokens as the parser reports them."""

    def __init__(self):
        self.tokens: Deque[Token] = deque()

    def start(self, tag: str, attrib: Dict[str, str], nsmap: Optional[dict] = None) -> None:
        attributes = tuple(
            (qualified_name(key), value) for key, value in attrib.items()
        )
        self.tokens.append(StartElement(qualified_name(tag), attributes))

    def end(self, tag: str) -> None:
        self.tokens.append(EndElement(qualified_name(tag)))

    def data(self, data: str) -> None:
        self.tokens.append(Text(data))

    def close(self) -> None:
        return None


def iter_tokens(
    path: Union[str, Path],
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[Token]:
    """
    Lazily tokenize an XML file.

    The sequence is finite and cannot be restarted. The last token is
    always EndOfStream. On a syntax error, the tokens parsed before it are
    yielded first and MalformedDocumentError is raised in place of
    EndOfStream. The file is closed when the generator finishes or is
    closed early.

    Args:
        path: XML file to read
        chunk_size: Number of bytes fed to the parser per read

    Yields:
        StartElement, EndElement, Text tokens, then EndOfStream

    Raises:
        OSError: If the file cannot be opened or read
        MalformedDocumentError: If the bytes are not well-formed XML
    """
    path = Path(path)
    collector = _TokenCollector()
    parser = etree.XMLParser(
        target=collector,
        huge_tree=True,
        resolve_entities=False,
        no_network=True
    )

    logger.debug(f"Tokenizing {path}")

    with open(path, 'rb') as f:
        while True:
            chunk = f.read(chunk_size)
            error = None
            try:
                if chunk:
                    parser.feed(chunk)
                else:
                    parser.close()
            except etree.XMLSyntaxError as e:
                error = e

            # tokens parsed before a syntax error are still delivered
            while collector.tokens:
                yield collector.tokens.popleft()

            if error is not None:
                raise MalformedDocumentError(path, str(error)) from error

            if not chunk:
                break

    yield EndOfStream()
