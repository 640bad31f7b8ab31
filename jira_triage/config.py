"""Application configuration via Pydantic Settings.

NOTE: We explicitly map the .env variable names (GEMINI_API_KEY,
CLAUDE_API_KEY, etc.) to avoid silent misconfiguration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Backends
    gemini_api_key: str = Field(default="", validation_alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.0-flash", validation_alias="GEMINI_MODEL")
    claude_api_key: str = Field(default="", validation_alias="CLAUDE_API_KEY")
    claude_model: str = Field(
        default="claude-3-5-sonnet-20241022",
        validation_alias="CLAUDE_MODEL",
    )
    llm_timeout_seconds: float = Field(default=30.0, gt=0, validation_alias="LLM_TIMEOUT_SECONDS")

    # Generation parameters: scoring favours variety, theme favours consistency
    scoring_temperature: float = Field(default=0.3, validation_alias="SCORING_TEMPERATURE")
    scoring_max_tokens: int = Field(default=2000, validation_alias="SCORING_MAX_TOKENS")
    theme_temperature: float = Field(default=0.1, validation_alias="THEME_TEMPERATURE")
    theme_max_tokens: int = Field(default=50, validation_alias="THEME_MAX_TOKENS")
    concurrent_dispatch: bool = Field(default=True, validation_alias="CONCURRENT_DISPATCH")

    # Rate limiting
    rate_limit_enabled: bool = Field(default=True, validation_alias="RATE_LIMIT_ENABLED")
    rate_limit_per_minute: int = Field(default=30, gt=0, validation_alias="RATE_LIMIT_PER_MINUTE")

    # App
    verbose_logging: bool = Field(default=False, validation_alias="VERBOSE_LOGGING")
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }


settings = Settings()
