# src/ado_review/main.py
import sys
import asyncio
import logging
from pydantic import ValidationError

from ado_review.config import Settings, resolve_exclude_patterns
from ado_review.platforms.azure_devops import AzureDevOpsClient
from ado_review.providers.base import LLMProvider
from ado_review.providers.openai_provider import OpenAIProvider
from ado_review.review.engine import EngineReviewResult, ReviewEngine


logger = logging.getLogger(__name__)


def get_provider(settings: Settings) -> LLMProvider:
    return OpenAIProvider(
        api_key=settings.openai_api_key,
        model=settings.model,
        base_url=settings.openai_base_url,
    )


def get_platform(settings: Settings) -> AzureDevOpsClient:
    if settings.pull_request_id is None:
        raise ValueError("SYSTEM_PULLREQUEST_PULLREQUESTID is not set, the task must run in a pull request build")
    return AzureDevOpsClient(
        token=settings.azure_devops_token,
        collection_uri=settings.collection_uri,
        project=settings.team_project,
        repository=settings.repository_name,
        pull_request_id=settings.pull_request_id,
    )


def build_engine(settings: Settings) -> ReviewEngine:
    """Wire clients and configuration into a review engine."""
    patterns = resolve_exclude_patterns(settings)
    if patterns:
        logger.info(f"Excluding files matching: {', '.join(patterns)}")
    return ReviewEngine(
        platform=get_platform(settings),
        provider=get_provider(settings),
        exclude_patterns=patterns,
        max_concurrency=settings.max_concurrency,
        review_timeout=settings.review_timeout,
    )


async def run_review(settings: Settings) -> EngineReviewResult:
    engine = build_engine(settings)
    try:
        result = await engine.review_pull_request()
    finally:
        await engine.provider.close()
    logger.info(
        f"Review completed: {result.files_reviewed} files, {result.hunks_analyzed} hunks, "
        f"{result.comments_count} comments{' submitted' if result.submitted else ''}"
    )
    return result


def report_failure(error: Exception) -> None:
    print(f"Error: {error}", file=sys.stderr)
    # Azure Pipelines logging command, marks the task as failed
    print(f"##vso[task.complete result=Failed;]{error}")


def main() -> int:
    try:
        settings = Settings()
    except ValidationError as e:
        report_failure(e)
        return 1

    try:
        logging.basicConfig(
            level=settings.log_level.upper(),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        asyncio.run(run_review(settings))
    except Exception as e:
        logger.exception(f"Review failed: {e}")
        report_failure(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
