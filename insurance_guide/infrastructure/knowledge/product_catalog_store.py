from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from insurance_guide.application.exceptions import CatalogError
from insurance_guide.application.ports.product_catalog import ProductCatalogPort
from insurance_guide.domain.entities.product import Product, ProductCategory
from insurance_guide.infrastructure.knowledge.product_catalog_data import PRODUCTS


logger = logging.getLogger(__name__)


class ProductRecordSchema(BaseModel):
    """On-disk product record. Accepts the camelCase keys of exported catalogs."""

    id: str
    name: str
    category: ProductCategory
    strong_point: str | None = Field(default=None, alias="strongPoint")
    features: list[str] = Field(default_factory=list)
    advantages: list[str] = Field(default_factory=list)
    limitations: list[str] = Field(default_factory=list)
    defense_arguments: list[str] = Field(default_factory=list, alias="defenseArguments")
    ideal_client: list[str] | None = Field(default=None, alias="idealClient")

    model_config = ConfigDict(populate_by_name=True)

    def to_entity(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            category=self.category,
            strong_point=self.strong_point,
            features=tuple(self.features),
            advantages=tuple(self.advantages),
            limitations=tuple(self.limitations),
            defense_arguments=tuple(self.defense_arguments),
            ideal_client=tuple(self.ideal_client) if self.ideal_client is not None else None,
        )


class ProductCatalogStore(ProductCatalogPort):
    def __init__(self, products: list[Product] | None = None) -> None:
        self._products = list(products if products is not None else PRODUCTS)
        self._by_id: dict[str, Product] = {}
        for product in self._products:
            if not isinstance(product.category, ProductCategory):
                raise CatalogError(f"Product {product.id!r} has unknown category {product.category!r}.")
            if product.id in self._by_id:
                raise CatalogError(f"Duplicate product id {product.id!r}.")
            self._by_id[product.id] = product

    def list_products(self) -> list[Product]:
        return list(self._products)

    def get_product(self, product_id: str) -> Product | None:
        return self._by_id.get(product_id)

    def by_category(self, category: ProductCategory | None) -> list[Product]:
        if category is None:
            return list(self._products)
        return [p for p in self._products if p.category == category]


def load_catalog(path: str | None) -> ProductCatalogStore:
    """Build the catalog from a JSON file, or from the bundled products when path is empty."""
    if not path:
        return ProductCatalogStore()

    file_path = Path(path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Could not read catalog file {file_path}: {e}") from e

    if not isinstance(raw, list):
        raise CatalogError("Catalog file must contain a JSON array of products.")

    try:
        products = [ProductRecordSchema.model_validate(item).to_entity() for item in raw]
    except ValidationError as e:
        raise CatalogError(f"Invalid product record: {e}") from e

    logger.info("Catalog loaded", extra={"key": str(file_path), "count": len(products)})
    return ProductCatalogStore(products)
