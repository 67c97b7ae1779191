from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProductCategory(str, Enum):
    DENTAL = "Productos Dentales"
    AMBULATORY = "Productos Ambulatorios"
    HOSPITAL = "Productos Hospitalarios"
    MYBOX = "MyBox Salud"
    BUSINESS = "Productos de Empresa"


CATEGORY_LABELS: dict[ProductCategory, str] = {
    ProductCategory.DENTAL: "Dental",
    ProductCategory.AMBULATORY: "Ambulatorio",
    ProductCategory.HOSPITAL: "Hospitalario",
    ProductCategory.MYBOX: "MyBox",
    ProductCategory.BUSINESS: "Empresa",
}


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    category: ProductCategory
    strong_point: str | None = None
    features: tuple[str, ...] = field(default_factory=tuple)
    advantages: tuple[str, ...] = field(default_factory=tuple)
    limitations: tuple[str, ...] = field(default_factory=tuple)
    defense_arguments: tuple[str, ...] = field(default_factory=tuple)
    ideal_client: tuple[str, ...] | None = None
