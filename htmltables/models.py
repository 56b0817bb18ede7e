"""Value types for extracted HTML tables."""

from dataclasses import dataclass
from typing import Callable

import pandas as pd


@dataclass(frozen=True)
class Table:
    """One HTML table: ordered column names plus ordered rows of string cells.

    Every row holds exactly ``len(columns)`` values. Instances are immutable;
    transformations return new tables.
    """

    columns: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.columns and not self.rows

    def unique_columns(self) -> list[str]:
        """Column names made unique by suffixing repeats with _1, _2, ...

        Header cells are not guaranteed to be distinct, but record keys and
        DataFrame/SQL columns must be.
        """
        seen: dict[str, int] = {}
        names = []
        for name in self.columns:
            if name in seen:
                seen[name] += 1
                candidate = f"{name}_{seen[name]}"
                while candidate in seen:
                    seen[name] += 1
                    candidate = f"{name}_{seen[name]}"
                seen[candidate] = 0
                names.append(candidate)
            else:
                seen[name] = 0
                names.append(name)
        return names

    def to_records(self) -> list[dict]:
        """Rows as dicts keyed by (deduplicated) column name."""
        names = self.unique_columns()
        return [dict(zip(names, row)) for row in self.rows]

    def to_dataframe(self) -> pd.DataFrame:
        """Rows as a DataFrame with string columns."""
        return pd.DataFrame(list(self.rows), columns=self.unique_columns(), dtype=str)

    def map_cells(self, func: Callable[[str], str], include_columns: bool = False) -> "Table":
        """Return a new table with ``func`` applied to every cell.

        Args:
            func: Transformation applied to each cell value.
            include_columns: Also transform the column names.
        """
        columns = tuple(func(c) for c in self.columns) if include_columns else self.columns
        rows = tuple(tuple(func(v) for v in row) for row in self.rows)
        return Table(columns=columns, rows=rows)
