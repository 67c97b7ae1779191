from __future__ import annotations

import asyncio

import pytest

from insurance_guide.application.exceptions import AssistantUpstreamError, TranscriptError
from insurance_guide.application.use_cases.stream_response import APOLOGY_TEXT, StreamResponseUseCase
from insurance_guide.domain.entities.assistant import AssistantChunk
from insurance_guide.domain.entities.message import Citation, Message


@pytest.mark.asyncio
async def test_blank_prompts_are_rejected(store, catalog, scripted_assistant):
    assistant = scripted_assistant()
    streamer = StreamResponseUseCase(store=store, assistant=assistant, catalog=catalog)
    before = store.messages

    assert streamer.submit("") is None
    assert streamer.submit("   ") is None

    assert store.messages == before
    assert streamer.is_loading is False
    assert assistant.requests == []


@pytest.mark.asyncio
async def test_fragments_accumulate_into_final_text(store, catalog, scripted_assistant):
    assistant = scripted_assistant(chunks=[AssistantChunk(text="Hola"), AssistantChunk(text=" mundo")])
    streamer = StreamResponseUseCase(store=store, assistant=assistant, catalog=catalog)

    task = streamer.submit("Saluda")
    assert task is not None
    assert streamer.is_loading is True
    assert store.messages[-2:] == [Message(sender="user", text="Saluda"), Message(sender="assistant", text="")]

    await task

    assert store.last == Message(sender="assistant", text="Hola mundo")
    assert not store.last.sources
    assert streamer.is_loading is False


@pytest.mark.asyncio
async def test_transcript_sees_accumulated_prefixes(store, catalog, scripted_assistant):
    seen: list[str] = []
    store.subscribe(lambda messages: seen.append(messages[-1].text))
    assistant = scripted_assistant(
        chunks=[AssistantChunk(text="Ho"), AssistantChunk(text="la"), AssistantChunk(text="!")]
    )
    streamer = StreamResponseUseCase(store=store, assistant=assistant, catalog=catalog)

    await streamer.submit("hola")

    # user message, placeholder, then one full-text replacement per fragment
    assert seen == ["hola", "", "Ho", "Hola", "Hola!"]


@pytest.mark.asyncio
async def test_submit_is_rejected_while_loading(store, catalog, scripted_assistant):
    gate = asyncio.Event()
    assistant = scripted_assistant(chunks=[AssistantChunk(text="parcial")], gate=gate)
    streamer = StreamResponseUseCase(store=store, assistant=assistant, catalog=catalog)

    task = streamer.submit("primera")
    await asyncio.sleep(0.01)
    count = len(store.messages)

    assert streamer.submit("segunda") is None
    assert len(store.messages) == count
    assert streamer.is_loading is True

    gate.set()
    await task

    assert streamer.is_loading is False
    assert len(assistant.requests) == 1


@pytest.mark.asyncio
async def test_failure_mid_stream_replaces_placeholder_with_apology(store, catalog, scripted_assistant):
    assistant = scripted_assistant(
        chunks=[
            AssistantChunk(text="Empiezo", citations=(Citation(uri="a", title="A"),)),
        ],
        error=AssistantUpstreamError("connection reset"),
    )
    streamer = StreamResponseUseCase(store=store, assistant=assistant, catalog=catalog)

    await streamer.submit("pregunta")

    assert store.last.text == APOLOGY_TEXT
    assert store.last.sources is None
    assert streamer.is_loading is False


@pytest.mark.asyncio
async def test_citations_deduplicated_in_first_seen_order(store, catalog, scripted_assistant):
    assistant = scripted_assistant(
        chunks=[
            AssistantChunk(text="Uno", citations=(Citation(uri="a", title="A"),)),
            AssistantChunk(
                text=" dos",
                citations=(Citation(uri="b", title="B"), Citation(uri="a", title="A")),
            ),
            AssistantChunk(citations=(Citation(uri="", title="sin uri"), Citation(uri="c", title=""))),
        ]
    )
    streamer = StreamResponseUseCase(store=store, assistant=assistant, catalog=catalog)

    await streamer.submit("fuentes")

    assert store.last.text == "Uno dos"
    assert store.last.sources == (Citation(uri="a", title="A"), Citation(uri="b", title="B"))


@pytest.mark.asyncio
async def test_request_carries_catalog_policy_and_web_search(store, catalog, scripted_assistant):
    assistant = scripted_assistant(chunks=[AssistantChunk(text="ok")])
    streamer = StreamResponseUseCase(store=store, assistant=assistant, catalog=catalog)

    await streamer.submit("¿Qué es el copago?")

    request = assistant.requests[0]
    assert request.prompt == "¿Qué es el copago?"
    assert request.web_search is True
    assert "defenseArguments" in request.system_instruction
    for product in catalog.list_products():
        assert product.name in request.system_instruction


@pytest.mark.asyncio
async def test_resubmit_after_failure_is_accepted(store, catalog, scripted_assistant):
    failing = scripted_assistant(error=AssistantUpstreamError("timeout"))
    streamer = StreamResponseUseCase(store=store, assistant=failing, catalog=catalog)
    await streamer.submit("uno")

    failing.error = None
    failing.chunks = [AssistantChunk(text="bien")]
    await streamer.submit("uno")

    assert store.last.text == "bien"


def test_user_messages_cannot_be_replaced(store):
    store.append(Message(sender="user", text="hola"))

    with pytest.raises(TranscriptError):
        store.replace_last(lambda m: Message(sender="assistant", text="cambiado"))
    assert store.last == Message(sender="user", text="hola")
