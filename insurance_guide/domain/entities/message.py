from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Sender = Literal["user", "assistant"]


@dataclass(frozen=True)
class Citation:
    uri: str
    title: str


@dataclass(frozen=True)
class Message:
    sender: Sender
    text: str
    sources: tuple[Citation, ...] | None = None
