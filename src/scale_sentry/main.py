import re
import hmac
import hashlib
import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from fastapi import FastAPI, Header, HTTPException, BackgroundTasks, Request
from pydantic import BaseModel, Field, model_validator

from scale_sentry.config import Settings
from scale_sentry.models.report import AnalysisOut, FileRecordOut
from scale_sentry.models.webhook import GitHubPullRequestEvent, GitHubIssueCommentEvent
from scale_sentry.platforms.github import GitHubClient
from scale_sentry.providers.base import LLMProvider
from scale_sentry.providers.openai_provider import OpenAIProvider
from scale_sentry.review.engine import ReviewEngine
from scale_sentry.review.parser import AnalysisSummary, analyze_diff
from scale_sentry.review.prompts import truncate_diff
from scale_sentry.review.summary import render_summary


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

REVIEW_ACTIONS = ("opened", "synchronize", "reopened")
REVIEW_COMMAND = "/scalability"


@lru_cache
def get_settings() -> Settings:
    return Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.getLogger().setLevel(get_settings().log_level.upper())
    logger.info("Scale Sentry starting...")
    yield
    logger.info("Scale Sentry shutting down...")


app = FastAPI(title="Scale Sentry", lifespan=lifespan)


class WebhookResponse(BaseModel):
    status: str
    message: str | None = None


class AnalyzeRequest(BaseModel):
    diff: str


class ReviewRequest(BaseModel):
    url: str | None = None
    owner: str | None = None
    repo: str | None = None
    pull_number: int | None = None

    # Per-request overrides of the configured defaults
    target_language: str | None = None
    traffic_profile: str | None = None
    openai_model: str | None = None
    openai_max_tokens: int | None = Field(default=None, gt=0)
    openai_temperature: float | None = Field(default=None, ge=0, le=1)
    post_comment: bool | None = None

    @model_validator(mode="after")
    def check_params(self):
        if not self.url and not (self.owner and self.repo and self.pull_number):
            raise ValueError("Either url or owner+repo+pull_number required")
        return self

    def engine_overrides(self) -> dict:
        """ReviewEngine keyword arguments for the overrides that were given."""
        overrides = {
            "target_language": self.target_language,
            "traffic_profile": self.traffic_profile,
            "model": self.openai_model,
            "max_tokens": self.openai_max_tokens,
            "temperature": self.openai_temperature,
            "post_comment": self.post_comment,
        }
        return {key: value for key, value in overrides.items() if value is not None}


class ReviewResponse(BaseModel):
    status: str
    owner: str | None = None
    repo: str | None = None
    pull_number: int | None = None
    comment_posted: bool | None = None
    truncated: bool | None = None
    highlighted_tags: list[str] | None = None
    files: list[FileRecordOut] | None = None
    report: str | None = None
    warning: str | None = None
    error: str | None = None


def parse_github_pr_url(url: str) -> tuple[str, str, int]:
    """Parse GitHub PR URL -> (owner, repo, pull_number)."""
    match = re.match(r"https?://[^/]+/([^/]+)/([^/]+)/pull/(\d+)", url)
    if not match:
        raise ValueError(f"Invalid GitHub pull request URL: {url}")
    return match.group(1), match.group(2), int(match.group(3))


def get_provider(settings: Settings, model: str | None = None) -> LLMProvider | None:
    """Get LLM provider based on settings."""
    if settings.openai_api_key:
        return OpenAIProvider(
            api_key=settings.openai_api_key,
            model=model or settings.openai_model,
            base_url=settings.openai_base_url,
        )
    return None


def build_engine(
    settings: Settings,
    github: GitHubClient,
    provider: LLMProvider,
    overrides: dict | None = None,
) -> ReviewEngine:
    options = {
        "model": settings.openai_model,
        "max_tokens": settings.openai_max_tokens,
        "temperature": settings.openai_temperature,
        "target_language": settings.target_language,
        "traffic_profile": settings.traffic_profile,
        "post_comment": settings.post_comment,
        "max_diff_characters": settings.max_diff_characters,
        "reviewer_name": settings.reviewer_name,
        "log_dir": settings.log_dir,
    }
    options.update(overrides or {})
    return ReviewEngine(github=github, provider=provider, **options)


def summary_files(summary: AnalysisSummary | None) -> list[FileRecordOut]:
    if summary is None:
        return []
    return [FileRecordOut.model_validate(record, from_attributes=True) for record in summary.files]


def verify_signature(secret: str, body: bytes, signature: str | None) -> bool:
    """Check a GitHub X-Hub-Signature-256 header against the raw body."""
    if not signature:
        return False
    expected = "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}


@app.post("/api/analyze", response_model=AnalysisOut)
async def analyze(request: AnalyzeRequest):
    """Run the heuristic diff analysis without calling GitHub or the model."""
    settings = get_settings()
    diff, truncated = truncate_diff(request.diff, settings.max_diff_characters)
    summary = analyze_diff(diff)
    return AnalysisOut(
        files=summary_files(summary),
        highlighted_tags=summary.highlighted_tags,
        rendered=render_summary(summary),
        truncated=truncated,
    )


@app.post("/webhook/github", response_model=WebhookResponse)
async def github_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    x_github_event: str = Header(...),
    x_hub_signature_256: str | None = Header(None),
):
    settings = get_settings()
    body = await request.body()

    # Verify webhook signature
    if settings.github_webhook_secret and not verify_signature(
        settings.github_webhook_secret, body, x_hub_signature_256
    ):
        raise HTTPException(status_code=401, detail="Invalid webhook signature")

    payload = await request.json()

    if x_github_event == "ping":
        return WebhookResponse(status="ok", message="pong")

    if x_github_event == "pull_request":
        event = GitHubPullRequestEvent(**payload)

        if event.action in REVIEW_ACTIONS:
            background_tasks.add_task(
                run_review,
                owner=event.repository.owner.login,
                repo=event.repository.name,
                pull_number=event.number,
            )
            return WebhookResponse(status="accepted", message="Review scheduled")

    elif x_github_event == "issue_comment":
        event = GitHubIssueCommentEvent(**payload)

        if (
            event.action == "created"
            and event.issue.pull_request is not None
            and REVIEW_COMMAND in event.comment.body
        ):
            background_tasks.add_task(
                run_review,
                owner=event.repository.owner.login,
                repo=event.repository.name,
                pull_number=event.issue.number,
            )
            return WebhookResponse(status="accepted", message="Review scheduled")

    return WebhookResponse(status="ignored", message="Event not relevant")


@app.post("/api/review", response_model=ReviewResponse)
async def trigger_review(request: ReviewRequest):
    """Manually trigger a scalability review for a pull request."""
    settings = get_settings()
    github = GitHubClient(token=settings.github_token, base_url=settings.github_api_url)

    try:
        if request.url:
            owner, repo, pull_number = parse_github_pr_url(request.url)
        else:
            owner, repo, pull_number = request.owner, request.repo, request.pull_number

        provider = get_provider(settings, model=request.openai_model)
        if not provider:
            return ReviewResponse(
                status="error",
                error="No LLM provider configured",
            )

        engine = build_engine(settings, github, provider, overrides=request.engine_overrides())
        result = await engine.review_pr(owner=owner, repo=repo, pull_number=pull_number)

        return ReviewResponse(
            status=result.status,
            owner=owner,
            repo=repo,
            pull_number=pull_number,
            comment_posted=result.comment_posted,
            truncated=result.truncated,
            highlighted_tags=result.summary.highlighted_tags if result.summary else [],
            files=summary_files(result.summary),
            report=result.report,
            warning=result.warning,
        )

    except ValueError as e:
        return ReviewResponse(status="error", error=str(e))
    except Exception as e:
        logger.exception(f"Review failed: {e}")
        return ReviewResponse(status="error", error=str(e))


async def run_review(owner: str, repo: str, pull_number: int):
    """Background task to run the review."""
    settings = get_settings()
    github = GitHubClient(token=settings.github_token, base_url=settings.github_api_url)

    provider = get_provider(settings)
    if not provider:
        logger.error("No LLM provider configured")
        return

    engine = build_engine(settings, github, provider)

    try:
        await engine.review_pr(owner=owner, repo=repo, pull_number=pull_number)
        logger.info(f"Review completed for {owner}/{repo}#{pull_number}")
    except Exception as e:
        logger.exception(f"Review failed for {owner}/{repo}#{pull_number}: {e}")
