import base64
import difflib
import logging
from typing import Any
from urllib.parse import quote
import httpx
from ado_review.models.azure import AzureChangeEntry, AzureIteration, AzurePullRequest
from ado_review.models.pull_request import PullRequestContext
from ado_review.models.review import ReviewComment
from .base import GitPlatform


logger = logging.getLogger(__name__)

API_VERSION = "7.1"
CHANGES_PAGE_SIZE = 2000
THREAD_STATUS_ACTIVE = 1
COMMENT_TYPE_TEXT = 1


class AzureDevOpsClient(GitPlatform):
    def __init__(
        self,
        token: str,
        collection_uri: str,
        project: str,
        repository: str,
        pull_request_id: int,
    ):
        self.token = token
        self.collection_uri = collection_uri.rstrip("/")
        self.project = project
        self.repository = repository
        self.pull_request_id = pull_request_id

    def _headers(self) -> dict[str, str]:
        credentials = base64.b64encode(f":{self.token}".encode()).decode()
        return {"Authorization": f"Basic {credentials}"}

    def _repo_url(self, project: str, repository: str) -> str:
        return f"{self.collection_uri}/{quote(project, safe='')}/_apis/git/repositories/{quote(repository, safe='')}"

    async def _get_json(self, client: httpx.AsyncClient, url: str, params: dict[str, Any] | None = None) -> Any:
        response = await client.get(
            url,
            params={**(params or {}), "api-version": API_VERSION},
            headers=self._headers(),
            timeout=30.0,
        )
        response.raise_for_status()
        return response.json()

    async def get_pull_request(self) -> PullRequestContext:
        """Get metadata of the pull request this pipeline runs for."""
        url = f"{self._repo_url(self.project, self.repository)}/pullrequests/{self.pull_request_id}"
        async with httpx.AsyncClient() as client:
            data = await self._get_json(client, url)

        pr = AzurePullRequest.model_validate(data)
        return PullRequestContext(
            project_id=pr.repository.project.id,
            repository_id=pr.repository.id,
            pull_request_id=pr.pull_request_id,
            title=pr.title,
            description=pr.description or "",
        )

    async def get_pull_request_diff(
        self,
        project_id: str,
        repository_id: str,
        pull_request_id: int,
    ) -> str | None:
        """Render the latest iteration of the pull request as a git-style unified diff."""
        pr_url = f"{self._repo_url(project_id, repository_id)}/pullRequests/{pull_request_id}"

        async with httpx.AsyncClient() as client:
            data = await self._get_json(client, f"{pr_url}/iterations")
            iterations = [AzureIteration.model_validate(item) for item in data.get("value", [])]
            if not iterations:
                logger.info(f"Pull request {pull_request_id} has no iterations")
                return None

            latest = max(iterations, key=lambda it: it.id)
            changes = await self._get_iteration_changes(client, pr_url, latest.id)
            logger.info(f"Iteration {latest.id}: {len(changes)} changed items")

            sections = []
            for change in changes:
                if change.item.is_folder or change.item.git_object_type == "tree":
                    continue
                section = await self._render_change(
                    client, project_id, repository_id, change,
                    base_commit=latest.base_commit,
                    head_commit=latest.source_ref_commit.commit_id,
                )
                if section:
                    sections.append(section)

        if not sections:
            return None
        return "".join(sections)

    async def _get_iteration_changes(
        self,
        client: httpx.AsyncClient,
        pr_url: str,
        iteration_id: int,
    ) -> list[AzureChangeEntry]:
        entries = []
        skip = 0
        while True:
            data = await self._get_json(
                client,
                f"{pr_url}/iterations/{iteration_id}/changes",
                params={"$compareTo": 0, "$top": CHANGES_PAGE_SIZE, "$skip": skip},
            )
            entries.extend(AzureChangeEntry.model_validate(item) for item in data.get("changeEntries", []))
            if not data.get("nextTop"):
                return entries
            skip = data["nextSkip"]

    async def _get_item_content(
        self,
        client: httpx.AsyncClient,
        project_id: str,
        repository_id: str,
        path: str,
        commit_id: str | None,
    ) -> str | None:
        """File content at a commit, None if it does not exist there."""
        if commit_id is None:
            return None
        response = await client.get(
            f"{self._repo_url(project_id, repository_id)}/items",
            params={
                "path": path,
                "versionDescriptor.version": commit_id,
                "versionDescriptor.versionType": "commit",
                "api-version": API_VERSION,
            },
            headers={**self._headers(), "Accept": "text/plain"},
            timeout=30.0,
        )
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.text

    async def _render_change(
        self,
        client: httpx.AsyncClient,
        project_id: str,
        repository_id: str,
        change: AzureChangeEntry,
        base_commit: str | None,
        head_commit: str,
    ) -> str | None:
        kinds = change.change_kinds
        new_path = change.item.path
        old_path = change.original_path or new_path

        old_content = None
        new_content = None
        if "add" not in kinds:
            old_content = await self._get_item_content(client, project_id, repository_id, old_path, base_commit)
        if "delete" not in kinds:
            new_content = await self._get_item_content(client, project_id, repository_id, new_path, head_commit)

        return render_file_diff(
            old_path=old_path if old_content is not None else None,
            new_path=new_path if new_content is not None else None,
            old_content=old_content,
            new_content=new_content,
        )

    async def submit_review(
        self,
        project_id: str,
        repository_id: str,
        pull_request_id: int,
        comments: list[ReviewComment],
    ) -> None:
        """Post every comment as an active thread anchored to its file line."""
        url = f"{self._repo_url(project_id, repository_id)}/pullRequests/{pull_request_id}/threads"
        async with httpx.AsyncClient() as client:
            for comment in comments:
                response = await client.post(
                    url,
                    params={"api-version": API_VERSION},
                    headers=self._headers(),
                    json=thread_payload(comment),
                    timeout=30.0,
                )
                response.raise_for_status()
        logger.info(f"Posted {len(comments)} review comments to pull request {pull_request_id}")


def thread_payload(comment: ReviewComment) -> dict[str, Any]:
    position = {"line": comment.line, "offset": 1}
    return {
        "comments": [
            {
                "parentCommentId": 0,
                "content": comment.body,
                "commentType": COMMENT_TYPE_TEXT,
            }
        ],
        "status": THREAD_STATUS_ACTIVE,
        "threadContext": {
            "filePath": f"/{comment.path.lstrip('/')}",
            "rightFileStart": position,
            "rightFileEnd": position,
        },
    }


def render_file_diff(
    old_path: str | None,
    new_path: str | None,
    old_content: str | None,
    new_content: str | None,
) -> str | None:
    """Git-style unified diff of one file; None when there is nothing textual to show."""
    if old_path is None and new_path is None:
        return None

    old_name = old_path.lstrip("/") if old_path else None
    new_name = new_path.lstrip("/") if new_path else None
    header = f"diff --git a/{old_name or new_name} b/{new_name or old_name}\n"
    if old_name is None:
        header += "new file mode 100644\n"
    elif new_name is None:
        header += "deleted file mode 100644\n"

    if _is_binary(old_content) or _is_binary(new_content):
        return (
            header
            + f"Binary files {'a/' + old_name if old_name else '/dev/null'}"
            + f" and {'b/' + new_name if new_name else '/dev/null'} differ\n"
        )

    lines = list(difflib.unified_diff(
        _split_lines(old_content),
        _split_lines(new_content),
        fromfile=f"a/{old_name}" if old_name else "/dev/null",
        tofile=f"b/{new_name}" if new_name else "/dev/null",
        lineterm="",
    ))
    if not lines:
        return None
    return header + "\n".join(lines) + "\n"


def _is_binary(content: str | None) -> bool:
    return content is not None and "\x00" in content


def _split_lines(content: str | None) -> list[str]:
    """Split on `\\n` only; form feeds and other separators stay inside the line, as in git."""
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines
