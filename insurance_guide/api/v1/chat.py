from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from insurance_guide.api.v1.schemas import MessageSchema, SendMessageRequestSchema, TranscriptSchema
from insurance_guide.application.use_cases.chat_session import ChatSession
from insurance_guide.domain.entities.message import Message
from insurance_guide.wiring.dependencies import get_chat_session

router = APIRouter()
logger = logging.getLogger(__name__)

STREAM_POLL_SECONDS = 0.5


def _transcript(session: ChatSession) -> TranscriptSchema:
    return TranscriptSchema(
        messages=[MessageSchema.from_entity(m) for m in session.store.messages],
        is_loading=session.is_loading,
        can_clear=session.store.can_clear,
    )


@router.get("/chat/transcript", response_model=TranscriptSchema)
async def get_transcript(session: ChatSession = Depends(get_chat_session)):
    return _transcript(session)


@router.post("/chat/messages", response_model=TranscriptSchema, status_code=202)
async def send_message(
    req: SendMessageRequestSchema,
    wait: bool = Query(False, description="Respond only after the assistant has finished."),
    session: ChatSession = Depends(get_chat_session),
):
    if not req.text.strip():
        raise HTTPException(status_code=422, detail="Message text is empty.")
    task = session.send(req.text)
    if task is None:
        raise HTTPException(status_code=409, detail="A response is already in progress.")
    if wait:
        await session.wait()
    return _transcript(session)


@router.delete("/chat/transcript", response_model=TranscriptSchema)
async def clear_transcript(session: ChatSession = Depends(get_chat_session)):
    if session.is_loading:
        raise HTTPException(status_code=409, detail="A response is in progress.")
    if not session.clear_history():
        logger.info("Clear ignored", extra={"reason": "transcript already at greeting"})
    return _transcript(session)


def _event(kind: str, message: Message, is_loading: bool) -> str:
    payload = {
        "type": kind,
        "is_loading": is_loading,
        "message": MessageSchema.from_entity(message).model_dump(mode="json"),
    }
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


@router.get("/chat/stream")
async def stream_transcript(session: ChatSession = Depends(get_chat_session)):
    """Server-Sent Events with the last message after each change, until the response ends."""
    queue: asyncio.Queue[Message] = asyncio.Queue()
    unsubscribe = session.store.subscribe(lambda messages: queue.put_nowait(messages[-1]))

    async def generate():
        try:
            yield _event("message", session.store.last, session.is_loading)
            while session.is_loading:
                try:
                    message = await asyncio.wait_for(queue.get(), timeout=STREAM_POLL_SECONDS)
                except asyncio.TimeoutError:
                    continue
                yield _event("message", message, session.is_loading)
            yield _event("done", session.store.last, False)
        finally:
            unsubscribe()

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
