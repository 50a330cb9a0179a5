"""CSV tokenizing: raw text into a header row and a rectangular grid."""

import csv
import re

from importbox.schemas.import_schemas import ParsedGrid

_LINE_BREAK = re.compile(r"\r?\n")

_BOM = "\ufeff"


def decode_csv_bytes(file_content: bytes) -> str:
    """Decode uploaded CSV bytes to text.

    Tries UTF-8 (ignoring a byte-order mark) first, falls back to Latin-1,
    which accepts any byte sequence.

    Args:
        file_content: Raw CSV file bytes.

    Returns:
        Decoded text.
    """
    try:
        return file_content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return file_content.decode("latin-1")


def split_csv_line(line: str) -> list[str]:
    """Split one CSV line into trimmed cells.

    Double quotes open a quoted span in which commas do not split and ``""``
    stands for a literal quote. A quote opens a span only at the start of a
    cell (after optional spaces). Anywhere else it is a literal character, so
    ``12" pipe,5`` gives ``['12" pipe', '5']`` rather than one merged cell.
    """
    # A stray carriage return makes csv refuse the line
    reader = csv.reader([line.replace("\r", "")], skipinitialspace=True)
    cells = next(reader, [])
    if not cells:
        # csv yields no cells for a line holding only whitespace
        return [""]
    return [cell.strip() for cell in cells]


def _fit_row(cells: list[str], width: int) -> list[str]:
    """Pad a short row with empty cells or cut a long one to ``width``."""
    if len(cells) < width:
        return cells + [""] * (width - len(cells))
    return cells[:width]


def parse_csv_text(text: str) -> ParsedGrid:
    """Parse CSV text into headers and rows.

    Accepts ``\\n`` and ``\\r\\n`` line endings and skips blank lines. The first
    non-blank line is the header row. Rows shorter than the header are padded
    with ``""`` and longer rows are truncated, so every row has exactly one
    cell per header. Quoted values may not span lines. A leading byte-order
    mark is dropped.

    Empty input gives ``headers == [""]`` and no rows.

    Args:
        text: Raw CSV text.

    Returns:
        ParsedGrid with headers and rows.
    """
    lines = [line for line in _LINE_BREAK.split(text.lstrip(_BOM).strip()) if line.strip()]
    if not lines:
        return ParsedGrid(headers=[""], rows=[])

    headers = split_csv_line(lines[0])
    width = len(headers)
    rows = [_fit_row(split_csv_line(line), width) for line in lines[1:]]

    return ParsedGrid(headers=headers, rows=rows)


def parse_csv(file_content: bytes) -> ParsedGrid:
    """Decode and parse uploaded CSV bytes.

    Args:
        file_content: Raw CSV file bytes.

    Returns:
        ParsedGrid with headers and rows.
    """
    return parse_csv_text(decode_csv_bytes(file_content))
