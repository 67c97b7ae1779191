from abc import ABC, abstractmethod


class TranscriptStoragePort(ABC):
    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the raw snapshot stored under key, or None if absent."""
        raise NotImplementedError

    @abstractmethod
    def write(self, key: str, data: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the snapshot. Missing keys are not an error."""
        raise NotImplementedError
