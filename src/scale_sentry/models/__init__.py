from .config import RepoConfig
from .report import ChatMessage, AnalysisOut, FileRecordOut, SnippetOut
from .webhook import GitHubPullRequestEvent, GitHubIssueCommentEvent

__all__ = [
    "RepoConfig",
    "ChatMessage",
    "AnalysisOut",
    "FileRecordOut",
    "SnippetOut",
    "GitHubPullRequestEvent",
    "GitHubIssueCommentEvent",
]
