"""Application configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    log_level: str = "INFO"

    # LLM backend (API keys fall back to the provider's own env vars, e.g. OPENAI_API_KEY)
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    llm_api_key: Optional[str] = None
    llm_base_url: Optional[str] = None
    llm_temperature: float = 0.0
    llm_max_tokens: int = 1024

    # Translation settings
    translation_timeout: float = 60.0  # seconds per request
    max_attempts: int = 1  # 1 = a single request per text, no retry
    retry_wait_min: float = 1.0
    retry_wait_max: float = 10.0
    max_concurrent_requests: int = 0  # 0 = unbounded

    # File discovery
    file_extensions: list[str] = [".js", ".jsx", ".ts", ".tsx"]
    exclude_dirs: list[str] = [
        "node_modules",
        ".git",
        "dist",
        "build",
        "__pycache__",
        ".venv",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
