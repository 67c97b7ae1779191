from __future__ import annotations

from insurance_guide.domain.entities.product import Product


def build_product_question(product: Product) -> str:
    return (
        f'Háblame más sobre el producto "{product.name}", sus ventajas '
        "y para qué tipo de cliente es ideal."
    )


def should_scroll_to_chat(viewport_width: int | None, narrow_max_width: int) -> bool:
    """Narrow layouts stack the chat below the catalog, so it must be scrolled into view."""
    if viewport_width is None:
        return False
    return viewport_width < narrow_max_width
