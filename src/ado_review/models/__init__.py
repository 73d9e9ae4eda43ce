from .config import RepoConfig
from .diff import ChangeKind, FileDiff, Hunk, LineChange
from .pull_request import PullRequestContext
from .review import ReviewComment

__all__ = [
    "RepoConfig",
    "ChangeKind",
    "FileDiff",
    "Hunk",
    "LineChange",
    "PullRequestContext",
    "ReviewComment",
]
