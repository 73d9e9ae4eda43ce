# src/ado_review/review/engine.py
import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable
from ado_review.models.diff import FileDiff, Hunk
from ado_review.models.pull_request import PullRequestContext
from ado_review.models.review import ReviewComment
from ado_review.platforms.base import GitPlatform
from ado_review.providers.base import LLMProvider
from .filters import filter_files
from .mapper import map_comment
from .parser import parse_diff
from .prompts import build_review_prompt


logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    FETCHING_METADATA = "fetching_metadata"
    FETCHING_DIFF = "fetching_diff"
    PARSING = "parsing"
    FILTERING = "filtering"
    ANALYZING = "analyzing"
    SUBMITTING = "submitting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class EngineReviewResult:
    """Result of running review on a pull request."""
    files_reviewed: int = 0
    hunks_analyzed: int = 0
    comments: list[ReviewComment] = field(default_factory=list)
    submitted: bool = False

    @property
    def comments_count(self) -> int:
        return len(self.comments)


class ReviewEngine:
    def __init__(
        self,
        platform: GitPlatform,
        provider: LLMProvider,
        exclude_patterns: Iterable[str] = (),
        max_concurrency: int = 4,
        review_timeout: float | None = None,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.platform = platform
        self.provider = provider
        self.exclude_patterns = tuple(exclude_patterns)
        self.max_concurrency = max_concurrency
        self.review_timeout = review_timeout
        self.state: PipelineState | None = None

    def _enter(self, state: PipelineState) -> None:
        logger.debug(f"Pipeline state: {self.state.value if self.state else 'start'} -> {state.value}")
        self.state = state

    async def review_pull_request(self) -> EngineReviewResult:
        """Run AI review on the pull request and submit the comments as one review."""
        try:
            return await self._run()
        except Exception:
            self._enter(PipelineState.FAILED)
            raise

    async def _run(self) -> EngineReviewResult:
        self._enter(PipelineState.FETCHING_METADATA)
        pr = await self.platform.get_pull_request()
        logger.info(f"Reviewing pull request {pr.pull_request_id}: {pr.title}")

        self._enter(PipelineState.FETCHING_DIFF)
        diff = await self.platform.get_pull_request_diff(pr.project_id, pr.repository_id, pr.pull_request_id)
        if not diff:
            logger.info("No diff found")
            self._enter(PipelineState.DONE)
            return EngineReviewResult()

        self._enter(PipelineState.PARSING)
        files = parse_diff(diff)

        self._enter(PipelineState.FILTERING)
        files = filter_files(files, self.exclude_patterns)
        hunks_total = sum(len(f.hunks) for f in files)
        logger.info(f"{len(files)} files with {hunks_total} hunks left after filtering")

        self._enter(PipelineState.ANALYZING)
        comments = await self._analyze(files, pr)
        result = EngineReviewResult(
            files_reviewed=len(files),
            hunks_analyzed=hunks_total,
            comments=comments,
        )

        if not comments:
            logger.info("No review comments produced, nothing to submit")
            self._enter(PipelineState.DONE)
            return result

        self._enter(PipelineState.SUBMITTING)
        await self.platform.submit_review(pr.project_id, pr.repository_id, pr.pull_request_id, comments)
        result.submitted = True

        self._enter(PipelineState.DONE)
        return result

    async def _analyze(self, files: list[FileDiff], pr: PullRequestContext) -> list[ReviewComment]:
        """Review every hunk with bounded concurrency; comments keep file/hunk order."""
        semaphore = asyncio.Semaphore(self.max_concurrency)
        tasks = [
            asyncio.create_task(self._analyze_hunk(semaphore, file, hunk, pr))
            for file in files
            for hunk in file.hunks
        ]
        if not tasks:
            return []

        if self.review_timeout is None:
            try:
                await asyncio.gather(*tasks)
            except Exception:
                await _cancel(tasks)
                raise
        else:
            _, pending = await asyncio.wait(tasks, timeout=self.review_timeout)
            if pending:
                logger.warning(
                    f"Review timeout of {self.review_timeout}s reached, "
                    f"abandoning {len(pending)} of {len(tasks)} hunks"
                )
                await _cancel(pending)

        return [
            task.result()
            for task in tasks
            if not task.cancelled() and task.result() is not None
        ]

    async def _analyze_hunk(
        self,
        semaphore: asyncio.Semaphore,
        file: FileDiff,
        hunk: Hunk,
        pr: PullRequestContext,
    ) -> ReviewComment | None:
        async with semaphore:
            prompt = build_review_prompt(file, hunk, pr)
            try:
                critique = await self.provider.review(prompt)
            except Exception as e:
                logger.error(f"LLM review failed for {file.path} {hunk.header}: {e}")
                return None

        if critique is not None and not critique.strip():
            critique = None
        if critique is None:
            logger.debug(f"No comment for {file.path} {hunk.header}")
        return map_comment(file, hunk, critique)


async def _cancel(tasks: Iterable[asyncio.Task]) -> None:
    """Cancel unfinished tasks and wait until they have stopped."""
    tasks = list(tasks)
    for task in tasks:
        if not task.done():
            task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
