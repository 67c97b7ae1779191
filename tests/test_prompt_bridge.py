from __future__ import annotations

import asyncio

import pytest

from insurance_guide.application.use_cases.chat_session import ChatSession
from insurance_guide.application.use_cases.prompt_bridge import PromptBridge
from insurance_guide.application.utils.greeting import DEFAULT_GREETING_TEXT
from insurance_guide.domain.entities.assistant import AssistantChunk
from insurance_guide.infrastructure.store.memory_store import MemoryTranscriptStorage


def _session(catalog, assistant) -> ChatSession:
    session = ChatSession(
        catalog=catalog,
        storage=MemoryTranscriptStorage(),
        assistant=assistant,
        history_key="bridge-test",
        narrow_viewport_max_width=1024,
    )
    session.start()
    return session


def test_last_write_wins_before_handling():
    bridge = PromptBridge()
    bridge.set_pending("primero")
    bridge.set_pending("segundo")

    received: list[str] = []
    bridge.subscribe(received.append)

    assert received == ["segundo"]
    bridge.on_handled()
    assert bridge.pending is None


def test_unsubscribe_stops_notifications():
    bridge = PromptBridge()
    received: list[str] = []
    unsubscribe = bridge.subscribe(received.append)

    bridge.set_pending("uno")
    unsubscribe()
    bridge.set_pending("dos")

    assert received == ["uno"]


@pytest.mark.asyncio
async def test_only_latest_pending_prompt_is_submitted(catalog, scripted_assistant):
    assistant = scripted_assistant(chunks=[AssistantChunk(text="respuesta")])
    session = _session(catalog, assistant)

    session.bridge.set_pending("viejo")
    session.bridge.set_pending("nuevo")
    await asyncio.sleep(0)
    await session.wait()

    assert [r.prompt for r in assistant.requests] == ["nuevo"]
    assert session.bridge.pending is None
    user_texts = [m.text for m in session.store.messages if m.sender == "user"]
    assert user_texts == ["nuevo"]


@pytest.mark.asyncio
async def test_ask_about_product_submits_templated_question(catalog, scripted_assistant):
    assistant = scripted_assistant(chunks=[AssistantChunk(text="Es ideal para familias.")])
    session = _session(catalog, assistant)

    result = session.ask_about_product("plena-plus", viewport_width=800)
    await asyncio.sleep(0)
    await session.wait()

    assert result is not None
    assert result.scroll_to_chat is True
    assert result.prompt == (
        'Háblame más sobre el producto "Adeslas Plena Plus", sus ventajas '
        "y para qué tipo de cliente es ideal."
    )
    assert assistant.requests[0].prompt == result.prompt
    assert session.store.last.text == "Es ideal para familias."


@pytest.mark.asyncio
async def test_wide_viewport_does_not_scroll(catalog, scripted_assistant):
    session = _session(catalog, scripted_assistant())

    result = session.ask_about_product("go", viewport_width=1440)
    await asyncio.sleep(0)
    await session.wait()

    assert result is not None
    assert result.scroll_to_chat is False


@pytest.mark.asyncio
async def test_unknown_product_is_ignored(catalog, scripted_assistant):
    session = _session(catalog, scripted_assistant())

    assert session.ask_about_product("no-existe") is None
    assert session.bridge.pending is None


@pytest.mark.asyncio
async def test_pending_prompt_while_busy_is_handled_once(catalog, scripted_assistant):
    gate = asyncio.Event()
    assistant = scripted_assistant(gate=gate)
    session = _session(catalog, assistant)

    session.send("pregunta libre")
    session.ask_about_product("go")
    await asyncio.sleep(0)

    assert session.bridge.pending is None
    gate.set()
    await session.wait()
    assert [r.prompt for r in assistant.requests] == ["pregunta libre"]


def test_clear_history_is_noop_on_greeting(catalog, scripted_assistant):
    session = _session(catalog, scripted_assistant())

    assert session.clear_history() is False
    assert len(session.store.messages) == 1


@pytest.mark.asyncio
async def test_clear_history_is_rejected_while_streaming(catalog, scripted_assistant):
    gate = asyncio.Event()
    assistant = scripted_assistant(chunks=[AssistantChunk(text="respuesta tardía")], gate=gate)
    session = _session(catalog, assistant)

    session.send("pregunta")
    await asyncio.sleep(0)
    assert session.clear_history() is False

    gate.set()
    await session.wait()
    assert [m.text for m in session.store.messages[1:]] == ["pregunta", "respuesta tardía"]
    assert session.store.messages[0].text == DEFAULT_GREETING_TEXT

    assert session.clear_history() is True
    assert [m.text for m in session.store.messages] == [DEFAULT_GREETING_TEXT]
