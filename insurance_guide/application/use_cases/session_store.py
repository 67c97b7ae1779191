from __future__ import annotations

import logging
from typing import Callable

from pydantic import ValidationError

from insurance_guide.application.dto.transcript_snapshot import dump_transcript, parse_transcript
from insurance_guide.application.exceptions import TranscriptError, TranscriptStorageError
from insurance_guide.application.ports.transcript_storage import TranscriptStoragePort
from insurance_guide.application.utils.greeting import default_greeting, is_default_transcript
from insurance_guide.domain.entities.message import Message

TranscriptListener = Callable[[list[Message]], None]


class SessionStore:
    """
    Owns the ordered transcript of one conversation session.

    The transcript is never empty: the default greeting stands in for a missing
    history. Every mutation writes the full snapshot to storage; write failures
    are logged and the in-memory transcript stays authoritative.
    """

    def __init__(self, storage: TranscriptStoragePort, key: str) -> None:
        self._storage = storage
        self._key = key
        self._messages: list[Message] = [default_greeting()]
        self._listeners: list[TranscriptListener] = []
        self._logger = logging.getLogger(__name__)

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def last(self) -> Message:
        return self._messages[-1]

    @property
    def can_clear(self) -> bool:
        return not is_default_transcript(self._messages)

    def restore(self) -> list[Message]:
        try:
            raw = self._storage.read(self._key)
        except TranscriptStorageError:
            self._logger.exception("Failed to read chat history", extra={"key": self._key})
            raw = None

        messages: list[Message] = []
        if raw:
            try:
                messages = parse_transcript(raw)
            except ValidationError as e:
                self._logger.error(
                    "Discarding malformed chat history", extra={"key": self._key, "reason": str(e)}
                )
                self._erase()
                messages = []

        self._messages = messages or [default_greeting()]
        self._notify()
        return self.messages

    def append(self, message: Message) -> None:
        self._messages.append(message)
        self._persist()
        self._notify()

    def replace_last(self, mutator: Callable[[Message], Message]) -> Message:
        current = self._messages[-1]
        if current.sender != "assistant":
            raise TranscriptError("Only the in-flight assistant message can be replaced.")
        updated = mutator(current)
        if updated.sender != "assistant":
            raise TranscriptError("The in-flight message must remain an assistant message.")
        self._messages[-1] = updated
        self._persist()
        self._notify()
        return updated

    def clear(self) -> None:
        self._messages = [default_greeting()]
        self._erase()
        self._notify()

    def subscribe(self, listener: TranscriptListener) -> Callable[[], None]:
        """Call listener with the transcript after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.messages
        for listener in list(self._listeners):
            listener(snapshot)

    def _persist(self) -> None:
        try:
            self._storage.write(self._key, dump_transcript(self._messages))
        except TranscriptStorageError:
            self._logger.exception("Failed to save chat history", extra={"key": self._key})

    def _erase(self) -> None:
        try:
            self._storage.delete(self._key)
        except TranscriptStorageError:
            self._logger.exception("Failed to delete chat history", extra={"key": self._key})
