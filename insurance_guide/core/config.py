from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_ASSISTANT: str = "gpt-4.1-mini"
    OPENAI_TIMEOUT_SECONDS: float = 60.0

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str = "json"
    STORE_DIR: str = "./data/transcripts"
    CHAT_HISTORY_KEY: str = "adeslas-chat-history"

    CATALOG_PATH: str | None = None

    NARROW_VIEWPORT_MAX_WIDTH: int = 1024


settings = Settings()
