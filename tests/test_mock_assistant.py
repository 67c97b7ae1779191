from __future__ import annotations

import pytest

from insurance_guide.domain.entities.assistant import AssistantRequest
from insurance_guide.infrastructure.llm.mock_assistant import MockAssistant


@pytest.mark.asyncio
async def test_mock_answers_from_catalog(catalog):
    assistant = MockAssistant(catalog=catalog)
    request = AssistantRequest(prompt='Háblame del producto "Adeslas Dental Max"', system_instruction="")

    text = "".join([chunk.text or "" async for chunk in assistant.stream(request)])

    assert text.startswith("**Adeslas Dental Max**")
    assert "Familias con hijos en edad de ortodoncia" in text


@pytest.mark.asyncio
async def test_mock_without_product_match(catalog):
    assistant = MockAssistant(catalog=catalog)
    request = AssistantRequest(prompt="¿Qué tiempo hace?", system_instruction="")

    chunks = [chunk async for chunk in assistant.stream(request)]

    assert len(chunks) > 1
    assert all(not chunk.citations for chunk in chunks)
