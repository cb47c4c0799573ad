"""
Streaming XML extraction for the standard's DocBook documents.

- tokens: lazy token source over lxml's feed parser
- cursor: forward-only seek over one token stream
- row_decoder: positional cell-to-field decoding of registry rows
- plan_runner: executes extraction plans, selects documents by content
"""

from .tokens import (
    StartElement,
    EndElement,
    Text,
    EndOfStream,
    Token,
    iter_tokens,
)
from .cursor import Landmark, XmlCursor
from .row_decoder import read_row, resolve_version, FIELD_SLOTS
from .plan_runner import (
    extract_table,
    run_plan,
    find_document,
    read_edition,
    extract_part,
)

__all__ = [
    # Tokens
    'StartElement',
    'EndElement',
    'Text',
    'EndOfStream',
    'Token',
    'iter_tokens',
    # Cursor
    'Landmark',
    'XmlCursor',
    # Rows
    'read_row',
    'resolve_version',
    'FIELD_SLOTS',
    # Plans
    'extract_table',
    'run_plan',
    'find_document',
    'read_edition',
    'extract_part',
]
