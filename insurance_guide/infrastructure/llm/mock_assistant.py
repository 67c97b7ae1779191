from __future__ import annotations

import asyncio
from typing import AsyncIterator

from insurance_guide.application.ports.assistant import AssistantPort
from insurance_guide.application.ports.product_catalog import ProductCatalogPort
from insurance_guide.domain.entities.assistant import AssistantChunk, AssistantRequest


class MockAssistant(AssistantPort):
    """Offline assistant: answers from the catalog in a few streamed pieces."""

    def __init__(self, catalog: ProductCatalogPort, delay_seconds: float = 0.0) -> None:
        self._catalog = catalog
        self._delay = delay_seconds

    async def stream(self, request: AssistantRequest) -> AsyncIterator[AssistantChunk]:
        for piece in self._compose(request.prompt):
            if self._delay:
                await asyncio.sleep(self._delay)
            else:
                await asyncio.sleep(0)
            yield AssistantChunk(text=piece)

    def _compose(self, prompt: str) -> list[str]:
        lowered = prompt.lower()
        matches = [p for p in self._catalog.list_products() if p.name.lower() in lowered]
        if not matches:
            return [
                "(respuesta simulada) ",
                "No tengo conexión con el modelo. ",
                "Pregunta por un producto del catálogo por su nombre.",
            ]

        product = max(matches, key=lambda p: len(p.name))
        pieces = [f"**{product.name}**\n\n"]
        if product.strong_point:
            pieces.append(f"{product.strong_point}\n\n")
        pieces.extend(f"- {advantage}\n" for advantage in product.advantages)
        if product.ideal_client:
            pieces.append("\nCliente ideal: " + ", ".join(product.ideal_client) + ".")
        return pieces
