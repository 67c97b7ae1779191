from fastapi import APIRouter, Depends, HTTPException, Query

from insurance_guide.api.v1.schemas import (
    AskResponseSchema,
    CategorySchema,
    ComparisonSummarySchema,
    ComparisonTableSchema,
    FilterRequestSchema,
    ProductListSchema,
    ProductSchema,
    category_schemas,
)
from insurance_guide.application.use_cases.chat_session import ChatSession
from insurance_guide.wiring.dependencies import get_chat_session

router = APIRouter()


def _summary(session: ChatSession) -> ComparisonSummarySchema:
    summary = session.selection.summary()
    return ComparisonSummarySchema(
        product_ids=list(session.selection.state.compare_ids),
        count=summary.count,
        label=summary.label,
        names=summary.names,
        compare_label=summary.compare_label,
        can_compare=summary.can_compare,
    )


@router.get("/catalog/categories", response_model=list[CategorySchema])
def list_categories():
    return category_schemas()


@router.get("/catalog/products", response_model=ProductListSchema)
async def list_products(session: ChatSession = Depends(get_chat_session)):
    selection = session.selection
    return ProductListSchema(
        category=selection.state.category_filter,
        products=[ProductSchema.from_entity(p, selection.is_selected(p.id)) for p in selection.visible_products()],
    )


@router.put("/catalog/filter", response_model=ProductListSchema)
async def set_filter(req: FilterRequestSchema, session: ChatSession = Depends(get_chat_session)):
    session.selection.set_category_filter(req.category)
    return await list_products(session)


@router.post("/catalog/products/{product_id}/ask", response_model=AskResponseSchema)
async def ask_about_product(
    product_id: str,
    viewport_width: int | None = Query(None, ge=0),
    session: ChatSession = Depends(get_chat_session),
):
    result = session.ask_about_product(product_id, viewport_width=viewport_width)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Unknown product {product_id!r}")
    return AskResponseSchema(prompt=result.prompt, scroll_to_chat=result.scroll_to_chat)


@router.get("/compare", response_model=ComparisonSummarySchema)
async def get_comparison(session: ChatSession = Depends(get_chat_session)):
    return _summary(session)


@router.post("/compare/{product_id}/toggle", response_model=ComparisonSummarySchema)
async def toggle_compare(product_id: str, session: ChatSession = Depends(get_chat_session)):
    if session.catalog.get_product(product_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown product {product_id!r}")
    session.selection.toggle_compare(product_id)
    return _summary(session)


@router.delete("/compare", response_model=ComparisonSummarySchema)
async def clear_compare(session: ChatSession = Depends(get_chat_session)):
    session.selection.clear_compare()
    return _summary(session)


@router.get("/compare/table", response_model=ComparisonTableSchema)
async def comparison_table(session: ChatSession = Depends(get_chat_session)):
    if not session.selection.can_open_comparison:
        raise HTTPException(status_code=409, detail="Select at least two products to compare.")
    return ComparisonTableSchema.from_entity(session.comparison_table())
