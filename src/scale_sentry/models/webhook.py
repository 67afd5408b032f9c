from pydantic import BaseModel


class GitHubUser(BaseModel):
    login: str


class GitHubRepository(BaseModel):
    name: str
    full_name: str
    owner: GitHubUser


class GitHubBranchRef(BaseModel):
    ref: str
    sha: str | None = None


class GitHubPullRequest(BaseModel):
    number: int
    title: str
    state: str
    head: GitHubBranchRef
    base: GitHubBranchRef


class GitHubPullRequestEvent(BaseModel):
    action: str
    number: int
    pull_request: GitHubPullRequest
    repository: GitHubRepository
    sender: GitHubUser | None = None


class GitHubIssue(BaseModel):
    number: int
    pull_request: dict | None = None  # present only when the issue is a PR


class GitHubComment(BaseModel):
    body: str
    user: GitHubUser | None = None


class GitHubIssueCommentEvent(BaseModel):
    action: str
    issue: GitHubIssue
    comment: GitHubComment
    repository: GitHubRepository
