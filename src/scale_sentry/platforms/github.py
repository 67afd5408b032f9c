from typing import Any
from urllib.parse import quote
import httpx
from .base import GitPlatform


REPO_CONFIG_FILE = ".scale-sentry.yaml"


class GitHubClient(GitPlatform):
    def __init__(self, token: str, base_url: str = "https://api.github.com"):
        self.token = token
        self.api_url = base_url.rstrip("/")

    def _headers(self, accept: str = "application/vnd.github+json") -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": accept,
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def get_pull_request(self, owner: str, repo: str, pull_number: int) -> dict[str, Any]:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/pulls/{pull_number}",
                headers=self._headers(),
                timeout=30.0,
            )
            response.raise_for_status()
            return response.json()

    async def get_pull_request_diff(self, owner: str, repo: str, pull_number: int) -> str:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/pulls/{pull_number}",
                headers=self._headers(accept="application/vnd.github.v3.diff"),
                timeout=30.0,
            )
            response.raise_for_status()
            return response.text

    async def get_file_content(self, owner: str, repo: str, file_path: str, ref: str) -> str:
        encoded_path = quote(file_path, safe="/")
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/contents/{encoded_path}",
                params={"ref": ref},
                headers=self._headers(accept="application/vnd.github.raw+json"),
                timeout=30.0,
            )
            response.raise_for_status()
            return response.text

    async def get_repo_config(self, owner: str, repo: str, ref: str) -> str | None:
        """Get .scale-sentry.yaml content, returns None if not found."""
        try:
            return await self.get_file_content(owner, repo, REPO_CONFIG_FILE, ref)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise

    async def post_comment(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        body: str,
    ) -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"{self.api_url}/repos/{owner}/{repo}/issues/{pull_number}/comments",
                headers=self._headers(),
                json={"body": body},
                timeout=30.0,
            )
            response.raise_for_status()
