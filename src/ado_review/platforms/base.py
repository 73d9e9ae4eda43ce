from abc import ABC, abstractmethod
from ado_review.models.pull_request import PullRequestContext
from ado_review.models.review import ReviewComment


class GitPlatform(ABC):
    @abstractmethod
    async def get_pull_request(self) -> PullRequestContext:
        pass

    @abstractmethod
    async def get_pull_request_diff(
        self,
        project_id: str,
        repository_id: str,
        pull_request_id: int,
    ) -> str | None:
        """Unified diff of the pull request, None when there is nothing to diff."""
        pass

    @abstractmethod
    async def submit_review(
        self,
        project_id: str,
        repository_id: str,
        pull_request_id: int,
        comments: list[ReviewComment],
    ) -> None:
        pass
