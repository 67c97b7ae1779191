from __future__ import annotations

from pydantic import BaseModel, Field

from insurance_guide.application.utils.rendering import render_message_html
from insurance_guide.domain.entities.comparison import ComparisonTable
from insurance_guide.domain.entities.message import Message
from insurance_guide.domain.entities.product import CATEGORY_LABELS, Product, ProductCategory


class CategorySchema(BaseModel):
    value: ProductCategory
    label: str


class ProductSchema(BaseModel):
    id: str
    name: str
    category: ProductCategory
    strong_point: str | None = None
    features: list[str] = Field(default_factory=list)
    advantages: list[str] = Field(default_factory=list)
    limitations: list[str] = Field(default_factory=list)
    defense_arguments: list[str] = Field(default_factory=list)
    ideal_client: list[str] | None = None
    selected_for_compare: bool = False

    @classmethod
    def from_entity(cls, product: Product, selected: bool = False) -> "ProductSchema":
        return cls(
            id=product.id,
            name=product.name,
            category=product.category,
            strong_point=product.strong_point,
            features=list(product.features),
            advantages=list(product.advantages),
            limitations=list(product.limitations),
            defense_arguments=list(product.defense_arguments),
            ideal_client=list(product.ideal_client) if product.ideal_client is not None else None,
            selected_for_compare=selected,
        )


class ProductListSchema(BaseModel):
    category: ProductCategory | None = None
    products: list[ProductSchema]


class FilterRequestSchema(BaseModel):
    category: ProductCategory | None = None


class AskResponseSchema(BaseModel):
    prompt: str
    scroll_to_chat: bool


class ComparisonSummarySchema(BaseModel):
    product_ids: list[str]
    count: int
    label: str
    names: str
    compare_label: str
    can_compare: bool


class ComparisonRowSchema(BaseModel):
    field: str
    title: str
    cells: list[str | list[str]]


class ComparisonTableSchema(BaseModel):
    product_ids: list[str]
    product_names: list[str]
    rows: list[ComparisonRowSchema]

    @classmethod
    def from_entity(cls, table: ComparisonTable) -> "ComparisonTableSchema":
        return cls(
            product_ids=list(table.product_ids),
            product_names=list(table.product_names),
            rows=[
                ComparisonRowSchema(
                    field=row.field,
                    title=row.title,
                    cells=[list(c) if isinstance(c, tuple) else c for c in row.cells],
                )
                for row in table.rows
            ],
        )


class CitationSchema(BaseModel):
    uri: str
    title: str


class MessageSchema(BaseModel):
    sender: str
    text: str
    sources: list[CitationSchema] | None = None
    html: str

    @classmethod
    def from_entity(cls, message: Message) -> "MessageSchema":
        return cls(
            sender=message.sender,
            text=message.text,
            sources=[CitationSchema(uri=s.uri, title=s.title) for s in message.sources]
            if message.sources
            else None,
            html=render_message_html(message),
        )


class TranscriptSchema(BaseModel):
    messages: list[MessageSchema]
    is_loading: bool
    can_clear: bool


class SendMessageRequestSchema(BaseModel):
    text: str


def category_schemas() -> list[CategorySchema]:
    return [CategorySchema(value=c, label=CATEGORY_LABELS[c]) for c in ProductCategory]
