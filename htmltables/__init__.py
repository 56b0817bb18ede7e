"""Regex-based HTML table extraction and parameter guard clauses."""

from htmltables.extractor import extract_all, extract_one
from htmltables.guards import InvalidArgument
from htmltables.models import Table

__all__ = ["extract_all", "extract_one", "InvalidArgument", "Table"]
__version__ = "0.1.0"
