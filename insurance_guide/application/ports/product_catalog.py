from __future__ import annotations

from abc import ABC, abstractmethod

from insurance_guide.domain.entities.product import Product, ProductCategory


class ProductCatalogPort(ABC):
    @abstractmethod
    def list_products(self) -> list[Product]:
        """All products in catalog order."""
        raise NotImplementedError

    @abstractmethod
    def get_product(self, product_id: str) -> Product | None:
        raise NotImplementedError

    @abstractmethod
    def by_category(self, category: ProductCategory | None) -> list[Product]:
        """Products of one category, or every product when category is None."""
        raise NotImplementedError
