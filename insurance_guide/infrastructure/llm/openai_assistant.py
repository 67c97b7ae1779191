from __future__ import annotations

import logging
from typing import Any, AsyncIterator

from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI, OpenAIError

from insurance_guide.application.exceptions import AssistantContractError, AssistantUpstreamError
from insurance_guide.application.ports.assistant import AssistantPort
from insurance_guide.core.config import settings
from insurance_guide.domain.entities.assistant import AssistantChunk, AssistantRequest
from insurance_guide.domain.entities.message import Citation


class OpenAIAssistant(AssistantPort):
    """
    OpenAI Responses API adapter implementing AssistantPort.

    Contract guarantees:
    - stream yields text deltas and url_citation annotations as they arrive
    - Raises:
        AssistantUpstreamError: networking/provider failures
        AssistantContractError: error events or events of the wrong shape
    """

    def __init__(self, client: AsyncOpenAI | None = None, model: str | None = None) -> None:
        self.client = client or AsyncOpenAI(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
            max_retries=0,
        )
        self.model = model or settings.OPENAI_MODEL_ASSISTANT
        self._logger = logging.getLogger(__name__)

    async def stream(self, request: AssistantRequest) -> AsyncIterator[AssistantChunk]:
        tools: list[dict[str, Any]] = [{"type": "web_search"}] if request.web_search else []
        try:
            events = await self.client.responses.create(
                model=self.model,
                instructions=request.system_instruction,
                input=request.prompt,
                tools=tools,
                stream=True,
            )
            async for event in events:
                chunk = _chunk_from_event(event)
                if chunk is not None:
                    yield chunk
        except (APITimeoutError, APIConnectionError) as e:
            raise AssistantUpstreamError(f"OpenAI request failed: {e}") from e
        except APIStatusError as e:
            raise AssistantUpstreamError(f"OpenAI returned HTTP {e.status_code}: {e.message}") from e
        except OpenAIError as e:
            raise AssistantUpstreamError(f"OpenAI error: {e}") from e


def _chunk_from_event(event: Any) -> AssistantChunk | None:
    event_type = _field(event, "type")

    if event_type == "response.output_text.delta":
        delta = _field(event, "delta")
        if not isinstance(delta, str):
            raise AssistantContractError("Stream: text delta is not a string.")
        return AssistantChunk(text=delta)

    if event_type == "response.output_text.annotation.added":
        citation = _citation(_field(event, "annotation"))
        return AssistantChunk(citations=(citation,)) if citation else None

    if event_type == "response.completed":
        citations = tuple(_final_citations(_field(event, "response")))
        return AssistantChunk(citations=citations) if citations else None

    if event_type in ("response.failed", "response.incomplete"):
        response = _field(event, "response")
        error = _field(response, "error") or _field(response, "incomplete_details")
        raise AssistantContractError(f"Stream ended with {event_type}: {error}")

    if event_type == "error":
        raise AssistantContractError(f"Stream error event: {_field(event, 'message')}")

    return None


def _final_citations(response: Any) -> list[Citation]:
    out: list[Citation] = []
    for item in _field(response, "output") or []:
        if _field(item, "type") != "message":
            continue
        for content in _field(item, "content") or []:
            if _field(content, "type") != "output_text":
                continue
            for annotation in _field(content, "annotations") or []:
                citation = _citation(annotation)
                if citation:
                    out.append(citation)
    return out


def _citation(annotation: Any) -> Citation | None:
    if _field(annotation, "type") != "url_citation":
        return None
    return Citation(uri=_field(annotation, "url") or "", title=_field(annotation, "title") or "")


def _field(obj: Any, name: str) -> Any:
    # Annotation payloads arrive as plain dicts, everything else as SDK models.
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)
