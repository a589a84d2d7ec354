"""Fixed-width text tables for repository reports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class ColSpec:
    """How one column is named and %-formatted in the header and in each row."""

    name: str
    header_template: str
    row_template: str


class Table:
    """Rows of column-name -> value mappings rendered as aligned text."""

    def __init__(self, header_spec: List[ColSpec]) -> None:
        self.header_spec = list(header_spec)
        self.records: List[Dict[str, Any]] = []

    def add_record(self, record: Dict[str, Any]) -> None:
        missing = [col.name for col in self.header_spec if col.name not in record]
        if missing:
            raise KeyError(f"record is missing columns: {', '.join(missing)}")
        self.records.append(record)

    def format_table(self) -> str:
        header = "".join(col.header_template % col.name for col in self.header_spec)
        lines = [header, "-" * len(header)]
        for record in self.records:
            lines.append("".join(col.row_template % record[col.name] for col in self.header_spec))
        return "\n".join(lines) + "\n"

    def __len__(self) -> int:
        return len(self.records)


__all__ = ["ColSpec", "Table"]
