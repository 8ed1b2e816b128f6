"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""

from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chronoatlas.utils.logger import setup_logger

load_dotenv(override=True)


logger = setup_logger("core_config")


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
        env_prefix="",
    )

    # ===== LLM Provider Configuration =====
    default_llm_provider: str = Field(
        default="gemini",
        alias="DEFAULT_LLM_PROVIDER",
        description="LLM provider used for generation (gemini, openai, ollama)",
    )

    # ===== Gemini Configuration =====
    gemini_api_key: str | None = Field(
        default=None, alias="GEMINI_API_KEY", description="Google Gemini API key"
    )

    default_gemini_model: str = Field(
        default="gemini-1.5-flash-latest",
        alias="DEFAULT_GEMINI_MODEL",
        description="Default Gemini model to use",
    )

    # ===== OpenAI Configuration =====
    openai_api_key: str | None = Field(
        default=None,
        alias="OPENAI_API_KEY",
        description="OpenAI API key for accessing OpenAI services",
    )

    openai_base_url: str | None = Field(
        default=None,
        alias="OPENAI_BASE_URL",
        description="OpenAI API base URL, defaults to https://api.openai.com/v1",
    )

    default_openai_model: str = Field(
        default="gpt-4o-mini",
        alias="DEFAULT_OPENAI_MODEL",
        description="Default OpenAI model to use",
    )

    # ===== Ollama Configuration =====
    ollama_base_url: str = Field(
        default="http://localhost:11434",
        alias="OLLAMA_BASE_URL",
        description="Ollama API base URL",
    )

    default_ollama_model: str = Field(
        default="llama3:instruct",
        alias="DEFAULT_OLLAMA_MODEL",
        description="Default Ollama model to use",
    )

    # ===== Generation Parameters =====
    llm_temperature: float = Field(
        default=0.7,
        alias="LLM_TEMPERATURE",
        description="Sampling temperature for every generation request",
    )

    llm_default_max_tokens: int = Field(
        default=8192,
        alias="LLM_DEFAULT_MAX_TOKENS",
        description="Maximum output tokens per generation request",
    )

    llm_timeout_seconds: float = Field(
        default=120.0,
        alias="LLM_TIMEOUT_SECONDS",
        description="Transport timeout for a single generation request",
    )

    enrichment_max_concurrency: int = Field(
        default=1,
        ge=1,
        alias="ENRICHMENT_MAX_CONCURRENCY",
        description="Concurrent per-entity enrichment calls (1 keeps them sequential)",
    )

    # ===== Cache Configuration =====
    cache_backend: Literal["database", "memory"] = Field(
        default="database",
        alias="CACHE_BACKEND",
        description="Where generated payloads are cached (database or memory)",
    )

    app_database_url: str | None = Field(
        default=None,
        alias="CHRONOATLAS_DATABASE_URL",
        description="Database URL for the payload cache",
    )

    cache_table_name: str = Field(
        default="historical_cache",
        alias="CACHE_TABLE_NAME",
        description="Table holding one cached payload per (year, continent)",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=8080, alias="SERVER_PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=False,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings and log warnings for missing critical configurations."""

        provider = self.default_llm_provider.lower()
        if provider == "gemini" and not self.gemini_api_key:
            logger.warning("GEMINI_API_KEY environment variable not set.")
        if provider == "openai" and not self.openai_api_key:
            logger.warning("OPENAI_API_KEY environment variable not set.")

        if self.cache_backend == "database" and not self.app_database_url:
            logger.warning("CHRONOATLAS_DATABASE_URL environment variable not set.")

        logger.debug(
            f"Cache backend: {self.cache_backend}, table: {self.cache_table_name}"
        )
        logger.debug(f"Enrichment concurrency: {self.enrichment_max_concurrency}")

        return self


# Global settings instance
settings = Settings()
