from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ComparisonRow:
    field: str
    title: str
    cells: tuple[str | tuple[str, ...], ...]  # one cell per column, "N/A" when empty


@dataclass(frozen=True)
class ComparisonTable:
    product_ids: tuple[str, ...]
    product_names: tuple[str, ...]
    rows: tuple[ComparisonRow, ...]
