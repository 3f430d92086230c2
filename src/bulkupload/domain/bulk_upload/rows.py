"""Split raw upload text into a header row and numbered data rows."""

from __future__ import annotations

import csv
import re
from enum import IntEnum
from typing import TYPE_CHECKING, Final

from bulkupload.domain.model import RawRow

from .errors import EmptyUploadError, MissingHeaderRowError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class FixedColumn(IntEnum):
    """Identity columns preceding the assessment columns."""

    LEGAL_ENTITY_IDENTIFIER = 0
    ENTITY_IDENTIFIER = 1
    COMMENT = 2


FIXED_COLUMN_COUNT: Final[int] = len(FixedColumn)
HEADER_ROW_NUMBER: Final[int] = 1

_LINE_BREAK: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")


def stream_row_data(text: str, *, delimiter: str = ",") -> Iterator[RawRow]:
    """Yield one ``RawRow`` per non-blank line, numbered from 1.

    Each line is parsed on its own, so an unbalanced quote stays within its row.
    """

    lines = (line for line in _LINE_BREAK.split(text) if line.strip())
    for row_number, line in enumerate(lines, start=HEADER_ROW_NUMBER):
        cells = next(csv.reader([line], delimiter=delimiter), [])
        yield RawRow(row_number, tuple(cells))


def split_header_row(rows: Iterable[RawRow]) -> tuple[RawRow, tuple[RawRow, ...]]:
    header_rows: list[RawRow] = []
    data_rows: list[RawRow] = []
    for row in rows:
        (header_rows if row.row_number == HEADER_ROW_NUMBER else data_rows).append(row)

    if len(header_rows) != 1:
        raise MissingHeaderRowError(len(header_rows))

    return header_rows[0], tuple(data_rows)


def read_rows(text: str, *, delimiter: str = ",") -> tuple[RawRow, tuple[RawRow, ...]]:
    """Return the header row and the data rows of an upload.

    Raises ``EmptyUploadError`` for blank input and ``MissingHeaderRowError``
    unless exactly one row is numbered 1.
    """

    if not text or not text.strip():
        raise EmptyUploadError
    return split_header_row(stream_row_data(text, delimiter=delimiter))


def column_values(rows: Iterable[RawRow], column: int) -> frozenset[str]:
    """Distinct trimmed, non-empty values of ``column`` across ``rows``."""

    values = ((row.cell(column) or "").strip() for row in rows)
    return frozenset(value for value in values if value)
