"""
Tests for durable transcript persistence.
"""

from __future__ import annotations

import json
import tempfile

from insurance_guide.application.exceptions import TranscriptStorageError
from insurance_guide.application.ports.transcript_storage import TranscriptStoragePort
from insurance_guide.application.use_cases.session_store import SessionStore
from insurance_guide.application.utils.greeting import DEFAULT_GREETING_TEXT
from insurance_guide.domain.entities.message import Citation, Message
from insurance_guide.infrastructure.store.json_store import JsonTranscriptStorage
from insurance_guide.infrastructure.store.memory_store import MemoryTranscriptStorage


KEY = "adeslas-chat-history"


class FailingStorage(TranscriptStoragePort):
    def read(self, key: str) -> str | None:
        return None

    def write(self, key: str, data: str) -> None:
        raise TranscriptStorageError("disk full")

    def delete(self, key: str) -> None:
        raise TranscriptStorageError("disk full")


def test_json_store_round_trips_transcript():
    """Test that a transcript written by one store is restored by the next."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = SessionStore(storage=JsonTranscriptStorage(data_dir=tmpdir), key=KEY)
        store.restore()
        store.append(Message(sender="user", text="¿Qué cubre Adeslas GO?"))
        store.append(Message(sender="assistant", text=""))
        store.replace_last(
            lambda m: Message(
                sender="assistant",
                text="Consultas y pruebas.",
                sources=(Citation(uri="https://example.com/go", title="GO"),),
            )
        )

        restored = SessionStore(storage=JsonTranscriptStorage(data_dir=tmpdir), key=KEY).restore()

        assert [m.sender for m in restored] == ["assistant", "user", "assistant"]
        assert restored[1].text == "¿Qué cubre Adeslas GO?"
        assert restored[2].sources == (Citation(uri="https://example.com/go", title="GO"),)


def test_snapshot_format_is_plain_message_array():
    storage = MemoryTranscriptStorage()
    store = SessionStore(storage=storage, key=KEY)
    store.restore()
    store.append(Message(sender="user", text="hola"))

    data = json.loads(storage.read(KEY))

    assert data == [
        {"sender": "assistant", "text": DEFAULT_GREETING_TEXT},
        {"sender": "user", "text": "hola"},
    ]


def test_restore_without_snapshot_seeds_greeting():
    store = SessionStore(storage=MemoryTranscriptStorage(), key=KEY)
    messages = store.restore()

    assert messages == [Message(sender="assistant", text=DEFAULT_GREETING_TEXT)]
    assert store.can_clear is False


def test_restore_keeps_persisted_history():
    storage = MemoryTranscriptStorage({KEY: '[{"sender":"user","text":"hi"}]'})
    messages = SessionStore(storage=storage, key=KEY).restore()

    assert messages[0] == Message(sender="user", text="hi")
    assert len(messages) == 1


def test_restore_empty_array_falls_back_to_greeting():
    storage = MemoryTranscriptStorage({KEY: "[]"})
    messages = SessionStore(storage=storage, key=KEY).restore()

    assert messages == [Message(sender="assistant", text=DEFAULT_GREETING_TEXT)]


def test_restore_malformed_snapshot_discards_it():
    for raw in ("{}", "{not json", '"text"', '[{"sender":"robot","text":"x"}]'):
        storage = MemoryTranscriptStorage({KEY: raw})
        messages = SessionStore(storage=storage, key=KEY).restore()

        assert messages == [Message(sender="assistant", text=DEFAULT_GREETING_TEXT)], raw
        assert storage.read(KEY) is None, raw


def test_restore_accepts_browser_bot_sender():
    storage = MemoryTranscriptStorage({KEY: '[{"sender":"bot","text":"Hola"}]'})
    messages = SessionStore(storage=storage, key=KEY).restore()

    assert messages == [Message(sender="assistant", text="Hola")]


def test_clear_resets_to_greeting_and_removes_snapshot():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = JsonTranscriptStorage(data_dir=tmpdir)
        store = SessionStore(storage=storage, key=KEY)
        store.restore()
        store.append(Message(sender="user", text="hola"))
        assert storage.read(KEY) is not None

        store.clear()

        assert store.messages == [Message(sender="assistant", text=DEFAULT_GREETING_TEXT)]
        assert storage.read(KEY) is None
        assert store.can_clear is False


def test_write_failures_do_not_interrupt_session():
    store = SessionStore(storage=FailingStorage(), key=KEY)
    store.restore()

    store.append(Message(sender="user", text="hola"))
    store.clear()

    assert store.messages == [Message(sender="assistant", text=DEFAULT_GREETING_TEXT)]


def test_json_storage_sanitizes_key_into_file_name():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = JsonTranscriptStorage(data_dir=tmpdir)
        storage.write("../escape/key", "[]")

        assert storage.read("../escape/key") == "[]"
        storage.delete("../escape/key")
        storage.delete("../escape/key")
        assert storage.read("../escape/key") is None
