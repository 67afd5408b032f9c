from abc import ABC, abstractmethod
from typing import Any


class GitPlatform(ABC):
    @abstractmethod
    async def get_pull_request(self, owner: str, repo: str, pull_number: int) -> dict[str, Any]:
        pass

    @abstractmethod
    async def get_pull_request_diff(self, owner: str, repo: str, pull_number: int) -> str:
        pass

    @abstractmethod
    async def get_file_content(self, owner: str, repo: str, file_path: str, ref: str) -> str:
        pass

    @abstractmethod
    async def post_comment(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        body: str,
    ) -> None:
        pass
