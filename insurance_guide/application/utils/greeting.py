from __future__ import annotations

from insurance_guide.domain.entities.message import Message


DEFAULT_GREETING_TEXT = (
    "Hola! Soy tu asistente virtual de Adeslas. ¿Cómo puedo ayudarte a entender "
    "nuestros productos o buscar información relevante?"
)


def default_greeting() -> Message:
    return Message(sender="assistant", text=DEFAULT_GREETING_TEXT)


def is_default_transcript(messages: list[Message]) -> bool:
    """True when the transcript holds nothing but the greeting."""
    return len(messages) <= 1 and (not messages or messages[0].text == DEFAULT_GREETING_TEXT)
