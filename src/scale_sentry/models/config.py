from pydantic import BaseModel, Field


class RepoConfig(BaseModel):
    """Per-repository overrides read from .scale-sentry.yaml."""
    target_language: str | None = None
    traffic_profile: str | None = None
    post_comment: bool | None = None
    exclude: list[str] = Field(default_factory=list)  # fnmatch patterns
