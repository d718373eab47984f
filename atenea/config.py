"""Application configuration loaded from environment variables."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from atenea.errors import ConfigurationError


class Settings(BaseSettings):
    """Global application settings."""

    openai_api_key: Optional[str] = Field(
        default=None, description="Secret key for OpenAI APIs."
    )
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model_chat: str = "gpt-4o-mini"
    model_timeout_seconds: float = 60.0
    model_max_retries: int = 1

    embedding_provider: Literal["openai", "bge-m3"] = "openai"
    embedding_model: str = "text-embedding-3-small"
    embedding_dimension: Optional[int] = None

    qdrant_url: str = "http://localhost:6333"
    qdrant_api_key: Optional[str] = None
    qdrant_collection: str = "tesis_chunks"

    corpus_path: str = "data/corpus/tesis.jsonl"
    bm25_index_dir: str = "data/bm25_index"

    # Retrieval (RAG path)
    retrieval_top_n: int = 100
    similarity_floor: float = 0.3
    full_text_weight: float = 0.2
    max_sources: int = 5
    max_context_tokens: int = 3000
    max_excerpt_tokens: int = 400

    # Ranking and scoring calibration
    pertinence_threshold: int = 25
    stage_one_limit: int = 15
    stage_two_limit: int = 5
    role_adjustment_bound: int = 5
    old_epoch_threshold: int = 8
    limited_authority_threshold: str = "sala"

    log_level: str = "INFO"
    allow_tiktoken_fallback: bool = False
    legal_disclaimer: str = (
        "La información proporcionada tiene fines orientativos y no sustituye la "
        "asesoría de un profesional del derecho"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def corpus_path_obj(self) -> Path:
        return Path(self.corpus_path)

    @property
    def bm25_index_path_obj(self) -> Path:
        return Path(self.bm25_index_dir)

    def require_openai_key(self) -> str:
        """Return the API key or fail with a diagnostic message."""
        if not self.openai_api_key or not self.openai_api_key.strip():
            raise ConfigurationError(
                "OPENAI_API_KEY is not configured. Set it in the environment or in .env; "
                "the /api/ask pipeline cannot start without it."
            )
        return self.openai_api_key.strip()


settings = Settings()
