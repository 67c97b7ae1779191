from __future__ import annotations

import logging
import re
from pathlib import Path

from insurance_guide.application.exceptions import TranscriptStorageError
from insurance_guide.application.ports.transcript_storage import TranscriptStoragePort


_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class JsonTranscriptStorage(TranscriptStoragePort):
    """One JSON file per key under data_dir, written atomically."""

    def __init__(self, data_dir: str = "./data/transcripts") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._logger = logging.getLogger(__name__)

    def _get_file_path(self, key: str) -> Path:
        """Get the file path for a storage key."""
        return self._data_dir / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def read(self, key: str) -> str | None:
        file_path = self._get_file_path(key)
        if not file_path.exists():
            return None
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise TranscriptStorageError(f"Could not read {file_path}: {e}") from e

    def write(self, key: str, data: str) -> None:
        """Save the snapshot to a temp file, then rename over the target."""
        file_path = self._get_file_path(key)
        temp_path = file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(data)
            temp_path.replace(file_path)
        except OSError as e:
            # Clean up temp file on error
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    self._logger.warning("Could not remove temp snapshot", extra={"key": key})
            raise TranscriptStorageError(f"Could not write {file_path}: {e}") from e

    def delete(self, key: str) -> None:
        file_path = self._get_file_path(key)
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            raise TranscriptStorageError(f"Could not delete {file_path}: {e}") from e
