from functools import lru_cache
import logging

from insurance_guide.application.ports.assistant import AssistantPort
from insurance_guide.application.ports.product_catalog import ProductCatalogPort
from insurance_guide.application.ports.transcript_storage import TranscriptStoragePort
from insurance_guide.application.use_cases.chat_session import ChatSession
from insurance_guide.core.config import settings
from insurance_guide.infrastructure.knowledge.product_catalog_store import load_catalog
from insurance_guide.infrastructure.llm.mock_assistant import MockAssistant
from insurance_guide.infrastructure.llm.openai_assistant import OpenAIAssistant
from insurance_guide.infrastructure.store.json_store import JsonTranscriptStorage
from insurance_guide.infrastructure.store.memory_store import MemoryTranscriptStorage


_chat_session: ChatSession | None = None


@lru_cache
def get_catalog() -> ProductCatalogPort:
    return load_catalog(settings.CATALOG_PATH)


def get_assistant() -> AssistantPort:
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        return OpenAIAssistant()
    logging.getLogger(__name__).info("OPENAI_API_KEY missing, using MockAssistant")
    return MockAssistant(catalog=get_catalog())


def get_transcript_storage() -> TranscriptStoragePort:
    if settings.STORE_PROVIDER.lower() == "memory":
        return MemoryTranscriptStorage()
    return JsonTranscriptStorage(data_dir=settings.STORE_DIR)


async def get_chat_session() -> ChatSession:
    """Runs on the event loop so the session is built once and only touched from the loop."""
    global _chat_session
    if _chat_session is None:
        _chat_session = ChatSession(
            catalog=get_catalog(),
            storage=get_transcript_storage(),
            assistant=get_assistant(),
            history_key=settings.CHAT_HISTORY_KEY,
            narrow_viewport_max_width=settings.NARROW_VIEWPORT_MAX_WIDTH,
        )
        _chat_session.start()
    return _chat_session


def reset_chat_session() -> None:
    global _chat_session
    if _chat_session is not None:
        _chat_session.close()
    _chat_session = None
