"""Export module for extracted HTML tables.

Writes tables to CSV (one file per table), JSON (one file per document)
and Excel (one sheet per table).
"""

import csv
import json
import logging
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from htmltables.guards import InvalidArgument, is_not_none_or_empty
from htmltables.models import Table

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_DIR = Path("data/exports")
EXPORT_FORMATS = ("csv", "json", "xlsx")

# Excel sheet titles are limited to 31 characters
_MAX_SHEET_TITLE = 31


def _append_text_row(ws, values):
    """Append values as literal strings.

    Control characters are not allowed in worksheets, and openpyxl would
    otherwise store cells starting with "=" as formulas.
    """
    ws.append([ILLEGAL_CHARACTERS_RE.sub("", v) for v in values])
    for cell in ws[ws.max_row]:
        if isinstance(cell.value, str) and cell.value.startswith("="):
            cell.data_type = "s"


class Exporter:
    """Exports extracted tables to CSV, JSON and Excel files."""

    def __init__(self, export_dir: Optional[Path] = None):
        self.export_dir = Path(export_dir or DEFAULT_EXPORT_DIR)
        self.export_dir.mkdir(parents=True, exist_ok=True)

    def export_csv(self, tables: list[Table], stem: str) -> Optional[list[Path]]:
        """Write each table to ``<stem>_<index>.csv``.

        Returns:
            Paths of the generated CSV files, or None if there were no tables.
        """
        is_not_none_or_empty(stem, "stem")
        if not tables:
            logger.warning(f"No tables to export for {stem}")
            return None

        paths = []
        for i, table in enumerate(tables):
            filepath = self.export_dir / f"{stem}_{i}.csv"
            with open(filepath, "w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                writer.writerow(table.columns)
                writer.writerows(table.rows)
            logger.info(f"Exported {table.row_count} rows to {filepath}")
            paths.append(filepath)
        return paths

    def export_json(self, tables: list[Table], stem: str) -> Optional[Path]:
        """Write all tables to ``<stem>.json`` as columns + records.

        Returns:
            Path to the generated JSON file, or None if there were no tables.
        """
        is_not_none_or_empty(stem, "stem")
        if not tables:
            logger.warning(f"No tables to export for {stem}")
            return None

        filepath = self.export_dir / f"{stem}.json"
        payload = [
            {"columns": list(table.columns), "records": table.to_records()}
            for table in tables
        ]
        filepath.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info(f"Exported {len(tables)} tables to {filepath}")
        return filepath

    def export_xlsx(self, tables: list[Table], stem: str) -> Optional[Path]:
        """Write all tables to ``<stem>.xlsx``, one sheet per table.

        Returns:
            Path to the generated workbook, or None if there were no tables.
        """
        is_not_none_or_empty(stem, "stem")
        if not tables:
            logger.warning(f"No tables to export for {stem}")
            return None

        wb = Workbook()
        wb.remove(wb.active)
        header_font = Font(bold=True)

        for i, table in enumerate(tables):
            ws = wb.create_sheet(title=f"Table {i}"[:_MAX_SHEET_TITLE])
            _append_text_row(ws, table.columns)
            for cell in ws[1]:
                cell.font = header_font
            for row in table.rows:
                _append_text_row(ws, row)

            for col_idx, name in enumerate(table.columns, 1):
                longest = max([len(name)] + [len(r[col_idx - 1]) for r in table.rows])
                ws.column_dimensions[get_column_letter(col_idx)].width = min(max(longest + 2, 8), 60)

        filepath = self.export_dir / f"{stem}.xlsx"
        wb.save(filepath)
        logger.info(f"Exported {len(tables)} sheets to {filepath}")
        return filepath

    def export_all(self, tables: list[Table], stem: str, formats=EXPORT_FORMATS) -> dict:
        """Export tables in every requested format.

        Returns:
            Dict mapping format name to the path(s) written (None if no data).
        """
        results = {}
        for fmt in formats:
            if fmt not in EXPORT_FORMATS:
                raise InvalidArgument(
                    f"Unknown export format '{fmt}'. Available: {', '.join(EXPORT_FORMATS)}",
                    "formats", "assertion",
                )
            results[fmt] = getattr(self, f"export_{fmt}")(tables, stem)
        return results
