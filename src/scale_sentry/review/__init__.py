from .heuristics import HeuristicRule, DEFAULT_RULES, regex_rule
from .parser import (
    analyze_diff,
    AnalysisSummary,
    FileRecord,
    Snippet,
    MAX_SNIPPETS_PER_FILE,
    MAX_LINES_PER_SNIPPET,
)
from .summary import render_summary
from .prompts import build_prompt, truncate_diff
from .report import build_report
from .engine import ReviewEngine, EngineReviewResult

__all__ = [
    "HeuristicRule",
    "DEFAULT_RULES",
    "regex_rule",
    "analyze_diff",
    "AnalysisSummary",
    "FileRecord",
    "Snippet",
    "MAX_SNIPPETS_PER_FILE",
    "MAX_LINES_PER_SNIPPET",
    "render_summary",
    "build_prompt",
    "truncate_diff",
    "build_report",
    "ReviewEngine",
    "EngineReviewResult",
]
