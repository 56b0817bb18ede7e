"""Regex-based extraction of HTML tables into Table values.

Given an HTML string containing n tables, ``extract_all`` returns n Tables
in document order. Matching is lenient: unterminated or malformed markup
simply produces fewer matches, never an exception. Nested tables are not
supported.

Cell and header text is captured verbatim (no entity unescaping, no tag
stripping); see ``htmltables.utils.html_text`` for optional cleanup.
"""

import logging
import re

from htmltables.guards import is_not_none, satisfies
from htmltables.models import Table

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE | re.DOTALL | re.MULTILINE

# Opening tags must end right after the tag name or continue with
# attributes, so <thead>, <tbody> and <track> are not mistaken for cells.
COMMENT_RE = re.compile(r"<!--(.*?)-->", _FLAGS)
TABLE_RE = re.compile(r"<table(?:\s[^>]*)?>(.*?)</table>", _FLAGS)
ROW_RE = re.compile(r"<tr(?:\s[^>]*)?>(.*?)</tr>", _FLAGS)
HEADER_RE = re.compile(r"<th(?:\s[^>]*)?>(.*?)</th>", _FLAGS)
CELL_RE = re.compile(r"<td(?:\s[^>]*)?>(.*?)</td>", _FLAGS)
HEADER_MARKER_RE = re.compile(r"<th[\s>/]", re.IGNORECASE)

GENERATED_COLUMN_PREFIX = "Column "


def strip_comments(html: str) -> str:
    """Remove all <!-- ... --> regions."""
    return COMMENT_RE.sub("", html)


def _has_header_cells(html: str) -> bool:
    return HEADER_MARKER_RE.search(html) is not None


def extract_all(html: str) -> list[Table]:
    """Parse every <table> in an HTML document.

    Args:
        html: HTML string containing zero or more tables.

    Returns:
        One Table per table region, in document order. Empty list if none.
    """
    html = satisfies(is_not_none(html, "html"), lambda v: isinstance(v, str), "html",
                     "Value must be a string.")
    tables = [extract_one(m.group(0)) for m in TABLE_RE.finditer(strip_comments(html))]
    logger.debug(f"Extracted {len(tables)} tables from {len(html)} chars of HTML")
    return tables


def extract_one(table_html: str) -> Table:
    """Parse a single HTML table.

    Columns come from <th> cells anywhere in the table when present,
    otherwise they are generated from the <td> count of the first row.
    Header rows are excluded from the data rows.

    A table with neither header cells nor rows yields an empty Table.
    """
    table_html = satisfies(is_not_none(table_html, "table_html"), lambda v: isinstance(v, str),
                           "table_html", "Value must be a string.")
    without_comments = strip_comments(table_html)
    row_matches = ROW_RE.findall(without_comments)

    if _has_header_cells(without_comments):
        # Headers are read from the raw table, across all header rows
        columns = tuple(HEADER_RE.findall(table_html))
    else:
        columns = _generate_columns(row_matches)

    rows = tuple(_parse_rows(row_matches, len(columns)))
    return Table(columns=columns, rows=rows)


def _generate_columns(row_matches: list[str]) -> tuple[str, ...]:
    """Name columns "Column 0".."Column k-1" from the first row's cell count."""
    if not row_matches:
        logger.debug("Table has no header cells and no rows; returning no columns")
        return ()
    count = len(CELL_RE.findall(row_matches[0]))
    return tuple(f"{GENERATED_COLUMN_PREFIX}{i}" for i in range(count))


def _parse_rows(row_matches: list[str], column_count: int):
    for row_html in row_matches:
        if _has_header_cells(row_html):
            continue
        values = [""] * column_count
        for index, cell in enumerate(CELL_RE.findall(row_html)):
            if index >= column_count:
                break
            values[index] = cell
        yield tuple(values)
