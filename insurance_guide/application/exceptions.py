class AssistantUpstreamError(RuntimeError):
    """Raised when the assistant provider fails (timeouts, network errors, service unavailable)."""
    pass


class AssistantContractError(RuntimeError):
    """Raised when the assistant stream is malformed or reports an error event."""
    pass


class TranscriptStorageError(RuntimeError):
    """Raised by storage adapters when a snapshot cannot be read, written or deleted."""
    pass


class TranscriptError(ValueError):
    """Raised on a transcript mutation that would break message immutability."""
    pass


class CatalogError(ValueError):
    """Raised when the product catalog violates id uniqueness or the category set."""
    pass
