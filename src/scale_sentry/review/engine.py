# src/scale_sentry/review/engine.py
import yaml
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from scale_sentry.platforms.github import GitHubClient
from scale_sentry.providers.base import LLMProvider
from scale_sentry.models.config import RepoConfig
from scale_sentry.models.report import ChatMessage
from .parser import AnalysisSummary, analyze_diff
from .summary import exclude_files, render_summary
from .prompts import build_prompt, truncate_diff
from .report import build_report


logger = logging.getLogger(__name__)

NO_DIFF_MESSAGE = "No diff content available for analysis."


@dataclass
class EngineReviewResult:
    """Result of running the scalability review on a pull request."""
    status: str
    report: str
    summary: AnalysisSummary | None = None
    truncated: bool = False
    comment_posted: bool = False
    warning: str | None = None


class ReviewEngine:
    def __init__(
        self,
        github: GitHubClient,
        provider: LLMProvider,
        model: str = "gpt-4o",
        max_tokens: int = 900,
        temperature: float = 0.2,
        target_language: str = "TypeScript",
        traffic_profile: str = "1k-100k requests per second",
        post_comment: bool = True,
        max_diff_characters: int = 12000,
        reviewer_name: str = "Scale Sentry AI",
        log_dir: str | None = None,
    ):
        self.github = github
        self.provider = provider
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.target_language = target_language
        self.traffic_profile = traffic_profile
        self.post_comment = post_comment
        self.max_diff_characters = max_diff_characters
        self.reviewer_name = reviewer_name
        self.log_dir = Path(log_dir) if log_dir else None
        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    async def review_pr(self, owner: str, repo: str, pull_number: int) -> EngineReviewResult:
        """Run the scalability review on a pull request."""
        pr_info = await self.github.get_pull_request(owner, repo, pull_number)
        head = pr_info.get("head", {})
        config_ref = head.get("sha") or head.get("ref") or ""

        logger.info(f"Fetching diff for PR #{pull_number}...")
        raw_diff = await self.github.get_pull_request_diff(owner, repo, pull_number)
        if not raw_diff.strip():
            logger.warning("No diff content retrieved. Skipping analysis.")
            return EngineReviewResult(status="skipped", report=NO_DIFF_MESSAGE)

        config = await self._load_config(owner, repo, config_ref)
        language = config.target_language or self.target_language
        traffic_profile = config.traffic_profile or self.traffic_profile
        post_comment = self.post_comment if config.post_comment is None else config.post_comment

        diff, truncated = truncate_diff(raw_diff, self.max_diff_characters)

        logger.info("Analysing diff heuristics...")
        summary = exclude_files(analyze_diff(diff), config.exclude)
        heuristic_summary = render_summary(summary)

        messages = build_prompt(
            language=language,
            traffic_profile=traffic_profile,
            heuristic_summary=heuristic_summary,
            diff=diff,
            truncated=truncated,
        )

        logger.info(f"Requesting analysis from model '{self.model}'...")
        content = await self.provider.complete(
            messages,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )

        report = build_report(
            pull_number=pull_number,
            repo_full_name=f"{owner}/{repo}",
            model=self.model,
            content=content,
            summary=summary,
            truncated=truncated,
            reviewer_name=self.reviewer_name,
        )
        self._save_review_log(owner, repo, pull_number, messages, report)

        comment_posted = False
        warning = None
        if post_comment:
            logger.info("Posting report as a pull request comment...")
            try:
                await self.github.post_comment(owner, repo, pull_number, report)
                comment_posted = True
            except Exception as e:
                warning = f"Failed to post comment: {e}"
                logger.warning(warning)
        else:
            logger.info("post_comment disabled. Skipping PR comment.")

        logger.info("Scalability analysis complete.")
        return EngineReviewResult(
            status="completed",
            report=report,
            summary=summary,
            truncated=truncated,
            comment_posted=comment_posted,
            warning=warning,
        )

    async def _load_config(self, owner: str, repo: str, ref: str) -> RepoConfig:
        """Load .scale-sentry.yaml from repo or use defaults."""
        if not ref:
            return RepoConfig()
        yaml_content = await self.github.get_repo_config(owner, repo, ref)
        if yaml_content is None:
            return RepoConfig()

        try:
            data = yaml.safe_load(yaml_content) or {}
            return RepoConfig(**data)
        except Exception as e:
            logger.warning(f"Invalid .scale-sentry.yaml: {e}")
            return RepoConfig()

    def _save_review_log(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        messages: list[ChatMessage],
        report: str,
    ) -> None:
        """Save the prompt and resulting report from one review run."""
        if not self.log_dir:
            return
        try:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_path = self.log_dir / f"{timestamp}_{owner}_{repo}_pr{pull_number}.txt"

            header = f"Review: {owner}/{repo} PR #{pull_number}\nTime: {timestamp}\n\n"
            prompt = "\n\n".join(f"[{m.role}]\n{m.content}" for m in messages)
            divider = "=" * 60
            log_path.write_text(f"{header}{prompt}\n\n{divider}\n\n{report}", encoding="utf-8")
            logger.info(f"Review log saved: {log_path}")
        except Exception as e:
            logger.warning(f"Failed to save review log: {e}")
