from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, TypeAdapter, field_validator

from insurance_guide.domain.entities.message import Citation, Message


class CitationDTO(BaseModel):
    uri: str
    title: str


class MessageSnapshotDTO(BaseModel):
    sender: Literal["user", "assistant"]
    text: str
    sources: list[CitationDTO] | None = None

    @field_validator("sender", mode="before")
    @classmethod
    def _legacy_sender(cls, value: Any) -> Any:
        # Snapshots written by the browser client call the assistant "bot".
        if value == "bot":
            return "assistant"
        return value

    @classmethod
    def from_entity(cls, message: Message) -> "MessageSnapshotDTO":
        return cls(
            sender=message.sender,
            text=message.text,
            sources=[CitationDTO(uri=s.uri, title=s.title) for s in message.sources]
            if message.sources
            else None,
        )

    def to_entity(self) -> Message:
        sources: tuple[Citation, ...] | None = None
        if self.sources:
            seen: dict[str, Citation] = {}
            for s in self.sources:
                seen.setdefault(s.uri, Citation(uri=s.uri, title=s.title))
            sources = tuple(seen.values())
        return Message(sender=self.sender, text=self.text, sources=sources)


TranscriptSnapshot = TypeAdapter(list[MessageSnapshotDTO])


def dump_transcript(messages: list[Message]) -> str:
    payload = [MessageSnapshotDTO.from_entity(m) for m in messages]
    return TranscriptSnapshot.dump_json(payload, exclude_none=True).decode("utf-8")


def parse_transcript(raw: str) -> list[Message]:
    """Parse a snapshot. Raises pydantic.ValidationError when it is not a valid message array."""
    return [dto.to_entity() for dto in TranscriptSnapshot.validate_json(raw)]
