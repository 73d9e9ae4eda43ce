from ado_review.models.diff import FileDiff, Hunk
from ado_review.models.pull_request import PullRequestContext


REVIEW_PROMPT = """Review the following code changes in the file "{file_path}" and take the pull request title and description into account when writing the response.

Title: {title}

Description:

---
{description}
---

Please provide comments and suggestions ONLY if there is something to improve, write the answer in markdown. If the code looks good, DO NOT return any text (leave the response completely empty).

{hunk_header}
{changes}
"""


def format_changes(hunk: Hunk) -> str:
    """Render hunk lines in diff notation: `+` added, `-` removed, space for context."""
    return "\n".join(f"{change.marker}{change.content}" for change in hunk.changes)


def build_review_prompt(file: FileDiff, hunk: Hunk, pr: PullRequestContext) -> str:
    """Build the review request for one hunk of one file."""
    return REVIEW_PROMPT.format(
        file_path=file.path or file.source_path,
        title=pr.title,
        description=pr.description,
        hunk_header=hunk.header,
        changes=format_changes(hunk),
    )
