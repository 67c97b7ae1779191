from __future__ import annotations

from dataclasses import dataclass

from insurance_guide.domain.entities.product import ProductCategory


@dataclass(frozen=True)
class SelectionState:
    category_filter: ProductCategory | None = None  # None shows every product
    compare_ids: tuple[str, ...] = ()  # first-toggle order
