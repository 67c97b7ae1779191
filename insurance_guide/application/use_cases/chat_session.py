from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from insurance_guide.application.ports.assistant import AssistantPort
from insurance_guide.application.ports.product_catalog import ProductCatalogPort
from insurance_guide.application.ports.transcript_storage import TranscriptStoragePort
from insurance_guide.application.use_cases.comparison import build_comparison
from insurance_guide.application.use_cases.prompt_bridge import PromptBridge
from insurance_guide.application.use_cases.selection import SelectionUseCase
from insurance_guide.application.use_cases.session_store import SessionStore
from insurance_guide.application.use_cases.stream_response import StreamResponseUseCase
from insurance_guide.application.utils.product_prompt import build_product_question, should_scroll_to_chat
from insurance_guide.domain.entities.comparison import ComparisonTable


@dataclass(frozen=True)
class AskResult:
    prompt: str
    scroll_to_chat: bool


class ChatSession:
    """
    The single conversation session of this process.

    Holds the transcript, the streaming use case, the prompt bridge and the
    catalog selection, and is handed to whoever needs them. Pending prompts
    from the bridge are submitted on the next event-loop turn, so a burst of
    product questions collapses into one submission of the latest text.
    """

    def __init__(
        self,
        catalog: ProductCatalogPort,
        storage: TranscriptStoragePort,
        assistant: AssistantPort,
        history_key: str,
        narrow_viewport_max_width: int = 1024,
    ) -> None:
        self.catalog = catalog
        self.store = SessionStore(storage=storage, key=history_key)
        self.streamer = StreamResponseUseCase(store=self.store, assistant=assistant, catalog=catalog)
        self.bridge = PromptBridge()
        self.selection = SelectionUseCase(catalog=catalog)
        self._narrow_viewport_max_width = narrow_viewport_max_width
        self._pending_scheduled = False
        self._unsubscribe = None
        self._logger = logging.getLogger(__name__)

    def start(self) -> None:
        """Restore the transcript and begin observing the prompt bridge. Call once."""
        self.store.restore()
        if self._unsubscribe is None:
            self._unsubscribe = self.bridge.subscribe(self._on_pending)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def is_loading(self) -> bool:
        return self.streamer.is_loading

    def send(self, text: str) -> asyncio.Task[None] | None:
        return self.streamer.submit(text)

    async def wait(self) -> None:
        await self.streamer.wait()

    def clear_history(self) -> bool:
        """Reset the transcript. No-op while a response streams or only the greeting is shown."""
        if self.is_loading or not self.store.can_clear:
            return False
        self.store.clear()
        return True

    def ask_about_product(self, product_id: str, viewport_width: int | None = None) -> AskResult | None:
        product = self.catalog.get_product(product_id)
        if product is None:
            return None
        prompt = build_product_question(product)
        self.bridge.set_pending(prompt)
        self._logger.info("Product question queued", extra={"product_id": product_id})
        return AskResult(
            prompt=prompt,
            scroll_to_chat=should_scroll_to_chat(viewport_width, self._narrow_viewport_max_width),
        )

    def comparison_table(self) -> ComparisonTable:
        return build_comparison(self.catalog, self.selection.state)

    def process_pending(self) -> asyncio.Task[None] | None:
        """Submit the pending prompt, if any, and acknowledge it."""
        self._pending_scheduled = False
        text = self.bridge.pending
        if text is None:
            return None
        task = self.streamer.submit(text)
        if task is None:
            self._logger.info("Pending prompt rejected", extra={"reason": "busy or blank"})
        self.bridge.on_handled()
        return task

    def _on_pending(self, text: str) -> None:
        if self._pending_scheduled:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop yet; the prompt waits in the bridge for process_pending().
            return
        self._pending_scheduled = True
        loop.call_soon(self.process_pending)
