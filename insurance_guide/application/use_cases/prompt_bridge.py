from __future__ import annotations

import logging
from typing import Callable

PendingObserver = Callable[[str], None]


class PromptBridge:
    """
    One-shot pending-prompt slot shared by the catalog views and the chat session.

    Setting a value while a previous one is unhandled overwrites it. Observers
    are told about every new value and, on subscription, about a value that is
    already waiting. The consumer acknowledges with `on_handled`.
    """

    def __init__(self) -> None:
        self._pending: str | None = None
        self._observers: list[PendingObserver] = []
        self._logger = logging.getLogger(__name__)

    @property
    def pending(self) -> str | None:
        return self._pending

    def set_pending(self, text: str) -> None:
        if self._pending is not None:
            self._logger.info("Overwriting unhandled pending prompt")
        self._pending = text
        for observer in list(self._observers):
            observer(text)

    def on_handled(self) -> None:
        self._pending = None

    def subscribe(self, observer: PendingObserver) -> Callable[[], None]:
        self._observers.append(observer)
        if self._pending is not None:
            observer(self._pending)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe
