from __future__ import annotations

from insurance_guide.application.ports.transcript_storage import TranscriptStoragePort


class MemoryTranscriptStorage(TranscriptStoragePort):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, data: str) -> None:
        self._data[key] = data

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
