"""Unit tests for CSV tokenizing."""

import pytest
from pydantic import ValidationError

from importbox.schemas.import_schemas import ParsedGrid
from importbox.services.import_service import (
    decode_csv_bytes,
    detect_lead_mapping,
    parse_csv,
    parse_csv_text,
    split_csv_line,
)


# =============================================================================
# Basic parsing
# =============================================================================


def test_parse_csv_text_basic() -> None:
    """Test headers and rows are split and trimmed."""
    grid = parse_csv_text("Date , Description,Amount\n2024-01-15,  Coffee ,4.50\n")
    assert grid.headers == ["Date", "Description", "Amount"]
    assert grid.rows == [["2024-01-15", "Coffee", "4.50"]]


def test_parse_csv_text_crlf_and_blank_lines() -> None:
    """Test CRLF endings are accepted and blank lines skipped."""
    grid = parse_csv_text("\r\na,b\r\n1,2\r\n\r\n   \r\n3,4\r\n\r\n")
    assert grid.headers == ["a", "b"]
    assert grid.rows == [["1", "2"], ["3", "4"]]


def test_parse_csv_text_headers_only() -> None:
    """Test a header row with no data rows."""
    grid = parse_csv_text("Name,Email\n")
    assert grid.headers == ["Name", "Email"]
    assert grid.rows == []


def test_parse_csv_text_empty_input() -> None:
    """Test empty input yields a single empty header and no rows."""
    for text in ("", "   ", "\n\n\r\n"):
        grid = parse_csv_text(text)
        assert grid.headers == [""]
        assert grid.rows == []


def test_parse_csv_text_duplicate_headers_kept() -> None:
    """Test headers need not be unique."""
    grid = parse_csv_text("Name,Name\nA,B")
    assert grid.headers == ["Name", "Name"]
    assert grid.rows == [["A", "B"]]


# =============================================================================
# Quoting
# =============================================================================


def test_quoted_comma_does_not_split() -> None:
    """Test commas inside quotes stay in the cell."""
    grid = parse_csv_text('desc,amount\n"Hello, World",50')
    assert grid.rows[0][0] == "Hello, World"
    assert grid.rows[0][1] == "50"


def test_doubled_quote_is_literal() -> None:
    """Test "" inside a quoted span is a literal quote."""
    grid = parse_csv_text('desc\n"Say ""Hello"""')
    assert grid.rows[0][0] == 'Say "Hello"'


def test_quoted_amount_with_thousands_separator() -> None:
    """Test a quoted amount keeps its comma."""
    grid = parse_csv_text('Date,Amount\n2024-01-01,"$1,234.56"')
    assert grid.rows[0] == ["2024-01-01", "$1,234.56"]


def test_quote_after_space_opens_quoted_span() -> None:
    """Test a quoted value preceded by a space still groups commas."""
    assert split_csv_line('a, "b, c" ,d') == ["a", "b, c", "d"]


def test_quote_inside_unquoted_cell_is_literal() -> None:
    """Test a quote in the middle of a cell neither opens a span nor merges cells."""
    assert split_csv_line('12" pipe,5') == ['12" pipe', "5"]


def test_split_csv_line_empty() -> None:
    """Test an empty line gives a single empty cell."""
    assert split_csv_line("") == [""]


# =============================================================================
# Row reconciliation
# =============================================================================


def test_short_row_is_padded() -> None:
    """Test missing trailing cells are filled with empty strings."""
    assert parse_csv_text("a,b,c\n1").rows[0] == ["1", "", ""]


def test_long_row_is_truncated() -> None:
    """Test extra cells beyond the header count are dropped."""
    assert parse_csv_text("a,b\n1,2,3,4").rows[0] == ["1", "2"]


@pytest.mark.parametrize(
    "text",
    [
        "a,b,c\n1,2\n1,2,3,4,5\n,,\n\"x,y\",z",
        "one\n1,2,3\n\n4",
        "h1,h2\n\"q\"\"uote\",\n,",
    ],
)
def test_every_row_matches_header_width(text: str) -> None:
    """Test rows are always exactly as wide as the header row."""
    grid = parse_csv_text(text)
    assert all(len(row) == len(grid.headers) for row in grid.rows)


def test_parsed_grid_rejects_ragged_rows() -> None:
    """Test the grid model refuses rows of the wrong width."""
    with pytest.raises(ValidationError, match="cells but there are"):
        ParsedGrid(headers=["a", "b"], rows=[["1"]])


# =============================================================================
# Byte decoding
# =============================================================================


def test_parse_csv_utf8_bom() -> None:
    """Test a UTF-8 byte-order mark does not leak into the first header."""
    grid = parse_csv("Date,Amount\n2024-01-01,5\n".encode("utf-8-sig"))
    assert grid.headers == ["Date", "Amount"]


def test_parse_csv_text_strips_leading_bom() -> None:
    """Test text that still starts with a byte-order mark keeps a clean first header."""
    grid = parse_csv_text("\ufeffCompany,Website\nAcme,acme.com\n")
    assert grid.headers == ["Company", "Website"]
    assert grid.rows == [["Acme", "acme.com"]]
    detected = detect_lead_mapping(grid.headers)
    assert detected.mapping["name"] == "Company"
    assert detected.mapping["website"] == "Website"


def test_parse_csv_latin1_fallback() -> None:
    """Test Latin-1 input decodes when it is not valid UTF-8."""
    grid = parse_csv("Company,City\nCafé Noir,Montréal\n".encode("latin-1"))
    assert grid.rows == [["Café Noir", "Montréal"]]


def test_decode_csv_bytes_utf8() -> None:
    """Test plain UTF-8 decodes unchanged."""
    assert decode_csv_bytes("Zürich".encode()) == "Zürich"
