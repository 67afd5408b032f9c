from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    # GitHub
    github_api_url: str = "https://api.github.com"
    github_token: str
    github_webhook_secret: str | None = None

    # LLM
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    openai_model: str = "gpt-4o"
    openai_max_tokens: int = Field(default=900, gt=0)
    openai_temperature: float = Field(default=0.2, ge=0, le=1)

    # Analysis defaults
    target_language: str = "TypeScript"
    traffic_profile: str = "1k-100k requests per second"
    post_comment: bool = True
    max_diff_characters: int = Field(default=12000, gt=0)
    reviewer_name: str = "Scale Sentry AI"
    log_dir: str | None = None
    log_level: str = "INFO"
