from __future__ import annotations

from dataclasses import dataclass

from insurance_guide.domain.entities.message import Citation


@dataclass(frozen=True)
class AssistantRequest:
    prompt: str
    system_instruction: str
    web_search: bool = True


@dataclass(frozen=True)
class AssistantChunk:
    text: str | None = None
    # Candidates as delivered by the provider; may lack a uri or title.
    citations: tuple[Citation, ...] = ()
