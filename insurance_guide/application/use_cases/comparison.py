from __future__ import annotations

from insurance_guide.application.ports.product_catalog import ProductCatalogPort
from insurance_guide.domain.entities.comparison import ComparisonRow, ComparisonTable
from insurance_guide.domain.entities.product import Product
from insurance_guide.domain.entities.selection_state import SelectionState


NOT_AVAILABLE = "N/A"

COMPARISON_FIELDS: tuple[tuple[str, str], ...] = (
    ("category", "Categoría"),
    ("strong_point", "Punto Fuerte"),
    ("features", "Características"),
    ("advantages", "Ventajas"),
    ("limitations", "Limitaciones"),
    ("defense_arguments", "Argumentos de Defensa"),
    ("ideal_client", "Cliente Ideal"),
)


def _cell(product: Product, field: str) -> str | tuple[str, ...]:
    value = getattr(product, field)
    if field == "category":
        return value.value
    if not value:
        return NOT_AVAILABLE
    return value


def build_comparison(catalog: ProductCatalogPort, selection: SelectionState) -> ComparisonTable:
    """Project the comparison set onto one column per product and one row per field."""
    products = [
        product
        for product in (catalog.get_product(pid) for pid in selection.compare_ids)
        if product is not None
    ]
    rows = tuple(
        ComparisonRow(field=field, title=title, cells=tuple(_cell(p, field) for p in products))
        for field, title in COMPARISON_FIELDS
    )
    return ComparisonTable(
        product_ids=tuple(p.id for p in products),
        product_names=tuple(p.name for p in products),
        rows=rows,
    )
