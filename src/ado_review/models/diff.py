from dataclasses import dataclass, field
from enum import Enum


class ChangeKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


@dataclass(frozen=True)
class LineChange:
    kind: ChangeKind
    content: str
    new_line_no: int | None = None
    old_line_no: int | None = None

    @property
    def line_no(self) -> int | None:
        """New-file number for added/context lines, old-file number for removed lines."""
        if self.kind is ChangeKind.REMOVED:
            return self.old_line_no
        return self.new_line_no

    @property
    def marker(self) -> str:
        if self.kind is ChangeKind.ADDED:
            return "+"
        if self.kind is ChangeKind.REMOVED:
            return "-"
        return " "


@dataclass(frozen=True)
class Hunk:
    header: str
    changes: tuple[LineChange, ...] = field(default_factory=tuple)

    @property
    def added_lines(self) -> list[int]:
        return [c.new_line_no for c in self.changes if c.kind is ChangeKind.ADDED]


@dataclass(frozen=True)
class FileDiff:
    path: str | None
    hunks: tuple[Hunk, ...] = field(default_factory=tuple)
    source_path: str | None = None

    @property
    def is_new(self) -> bool:
        return self.source_path is None and self.path is not None

    @property
    def is_deleted(self) -> bool:
        return self.path is None
