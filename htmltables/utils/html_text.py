"""HTML text cleanup for extracted cell values.

Extraction keeps cell markup verbatim. These helpers turn it into plain
text using BeautifulSoup with the lxml parser.
"""

import logging
import re

from bs4 import BeautifulSoup

from htmltables.models import Table

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def cell_text(raw: str) -> str:
    """Strip tags, unescape entities and collapse whitespace.

    Args:
        raw: Raw inner HTML of a cell, e.g. "<b>Alice&nbsp;Smith</b>".

    Returns:
        Plain text, e.g. "Alice Smith".
    """
    if not raw:
        return ""
    if "<" not in raw and "&" not in raw:
        return _WHITESPACE_RE.sub(" ", raw).strip()
    text = BeautifulSoup(raw, "lxml").get_text()
    return _WHITESPACE_RE.sub(" ", text.replace("\xa0", " ")).strip()


def plain_text(table: Table) -> Table:
    """Return a copy of ``table`` with every cell and column name cleaned."""
    return table.map_cells(cell_text, include_columns=True)
