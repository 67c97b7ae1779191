from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from insurance_guide.application.ports.product_catalog import ProductCatalogPort
from insurance_guide.domain.entities.product import Product, ProductCategory
from insurance_guide.domain.entities.selection_state import SelectionState


MIN_PRODUCTS_TO_COMPARE = 2


@dataclass(frozen=True)
class ComparisonSummary:
    """What the comparison bar shows for the current selection."""

    count: int
    label: str
    names: str
    compare_label: str
    can_compare: bool


class SelectionUseCase:
    """Category filter and comparison set of the catalog view. Lives in memory only."""

    def __init__(self, catalog: ProductCatalogPort) -> None:
        self._catalog = catalog
        self._state = SelectionState()
        self._visible_cache: tuple[ProductCategory | None, list[Product]] | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> SelectionState:
        return self._state

    def set_category_filter(self, category: ProductCategory | None) -> None:
        self._state = replace(self._state, category_filter=category)
        self._logger.info(
            "Category filter changed", extra={"category": category.value if category else "all"}
        )

    def visible_products(self) -> list[Product]:
        category = self._state.category_filter
        if self._visible_cache is None or self._visible_cache[0] != category:
            self._visible_cache = (category, self._catalog.by_category(category))
        return list(self._visible_cache[1])

    def toggle_compare(self, product_id: str) -> bool:
        """Add the id if absent, remove it if present. Returns True when it ends up selected."""
        ids = self._state.compare_ids
        if product_id in ids:
            self._state = replace(self._state, compare_ids=tuple(i for i in ids if i != product_id))
            return False
        self._state = replace(self._state, compare_ids=ids + (product_id,))
        return True

    def clear_compare(self) -> None:
        self._state = replace(self._state, compare_ids=())

    def is_selected(self, product_id: str) -> bool:
        return product_id in self._state.compare_ids

    def compared_products(self) -> list[Product]:
        """Selected products in selection order; ids missing from the catalog are skipped."""
        products: list[Product] = []
        for product_id in self._state.compare_ids:
            product = self._catalog.get_product(product_id)
            if product is None:
                self._logger.warning("Skipping stale comparison id", extra={"product_id": product_id})
                continue
            products.append(product)
        return products

    @property
    def can_open_comparison(self) -> bool:
        return len(self.compared_products()) >= MIN_PRODUCTS_TO_COMPARE

    def summary(self) -> ComparisonSummary:
        products = self.compared_products()
        count = len(products)
        return ComparisonSummary(
            count=count,
            label="Producto Seleccionado" if count == 1 else "Productos Seleccionados",
            names="  •  ".join(p.name for p in products),
            compare_label=f"Comparar ({count})" if count > 1 else "Comparar",
            can_compare=count >= MIN_PRODUCTS_TO_COMPARE,
        )
