from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator

from insurance_guide.domain.entities.assistant import AssistantChunk, AssistantRequest


class AssistantPort(ABC):
    @abstractmethod
    def stream(self, request: AssistantRequest) -> AsyncIterator[AssistantChunk]:
        """
        Send one prompt and yield incremental chunks in delivery order.

        Requirements:
        - Chunk text is a delta; callers accumulate it
        - Citations may repeat across chunks; callers deduplicate them
        - Raises AssistantUpstreamError on transport failures and
          AssistantContractError on malformed or error events, at any point
        """
        raise NotImplementedError
