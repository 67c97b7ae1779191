from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from insurance_guide.application.ports.assistant import AssistantPort
from insurance_guide.application.ports.product_catalog import ProductCatalogPort
from insurance_guide.application.use_cases.session_store import SessionStore
from insurance_guide.application.utils.system_instruction import build_system_instruction
from insurance_guide.domain.entities.assistant import AssistantRequest
from insurance_guide.domain.entities.message import Citation, Message


APOLOGY_TEXT = "Lo siento, he tenido un problema para procesar tu solicitud. Por favor, inténtalo de nuevo."


class StreamResponseUseCase:
    """
    Drives at most one assistant request at a time and streams it into the transcript.

    Accepting a prompt is synchronous: the user message and an empty assistant
    placeholder are appended before `submit` returns. The request itself runs in
    an asyncio task; each chunk replaces the placeholder text with everything
    accumulated so far, so readers always see a consistent prefix.
    """

    def __init__(self, store: SessionStore, assistant: AssistantPort, catalog: ProductCatalogPort) -> None:
        self._store = store
        self._assistant = assistant
        self._system_instruction = build_system_instruction(catalog.list_products())
        self._task: asyncio.Task[None] | None = None
        self._loading = False
        self._logger = logging.getLogger(__name__)

    @property
    def is_loading(self) -> bool:
        return self._loading

    def submit(self, prompt_text: str) -> asyncio.Task[None] | None:
        """Start a request. Returns None when the prompt is blank or a request is in flight."""
        if not prompt_text or not prompt_text.strip() or self._loading:
            return None
        loop = asyncio.get_running_loop()

        self._store.append(Message(sender="user", text=prompt_text))
        self._store.append(Message(sender="assistant", text=""))
        self._loading = True

        request = AssistantRequest(
            prompt=prompt_text,
            system_instruction=self._system_instruction,
            web_search=True,
        )
        self._task = loop.create_task(self._run(request))
        return self._task

    async def wait(self) -> None:
        """Wait for the in-flight request, if any, to reach a terminal state."""
        task = self._task
        if task is not None and not task.done():
            await asyncio.shield(task)

    async def _run(self, request: AssistantRequest) -> None:
        combined_text = ""
        combined_sources: dict[str, Citation] = {}
        try:
            async for chunk in self._assistant.stream(request):
                if chunk.text:
                    combined_text += chunk.text
                    text = combined_text
                    self._store.replace_last(lambda m: replace(m, text=text))

                for candidate in chunk.citations:
                    if candidate.uri and candidate.title:
                        combined_sources.setdefault(candidate.uri, candidate)

            final_sources = tuple(combined_sources.values())
            if final_sources:
                self._store.replace_last(lambda m: replace(m, sources=final_sources))

            self._logger.info(
                "Assistant response completed",
                extra={"chars": len(combined_text), "sources": len(final_sources)},
            )
        except Exception as e:
            self._logger.exception("Error fetching assistant response", extra={"reason": str(e)})
            self._store.replace_last(lambda m: Message(sender="assistant", text=APOLOGY_TEXT))
        finally:
            self._loading = False
