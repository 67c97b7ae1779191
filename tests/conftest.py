from __future__ import annotations

import asyncio
from typing import AsyncIterator

import pytest

from insurance_guide.application.ports.assistant import AssistantPort
from insurance_guide.application.use_cases.session_store import SessionStore
from insurance_guide.domain.entities.assistant import AssistantChunk, AssistantRequest
from insurance_guide.infrastructure.knowledge.product_catalog_store import ProductCatalogStore
from insurance_guide.infrastructure.store.memory_store import MemoryTranscriptStorage


HISTORY_KEY = "test-chat-history"


class ScriptedAssistant(AssistantPort):
    """Yields the given chunks, then optionally raises. Can be held open with `gate`."""

    def __init__(
        self,
        chunks: list[AssistantChunk] | None = None,
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.chunks = chunks or []
        self.error = error
        self.gate = gate
        self.requests: list[AssistantRequest] = []

    async def stream(self, request: AssistantRequest) -> AsyncIterator[AssistantChunk]:
        self.requests.append(request)
        for chunk in self.chunks:
            await asyncio.sleep(0)
            yield chunk
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error


@pytest.fixture
def catalog() -> ProductCatalogStore:
    return ProductCatalogStore()


@pytest.fixture
def storage() -> MemoryTranscriptStorage:
    return MemoryTranscriptStorage()


@pytest.fixture
def store(storage: MemoryTranscriptStorage) -> SessionStore:
    session_store = SessionStore(storage=storage, key=HISTORY_KEY)
    session_store.restore()
    return session_store


@pytest.fixture
def scripted_assistant():
    return ScriptedAssistant
