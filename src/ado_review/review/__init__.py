from .parser import parse_diff
from .filters import filter_files, is_excluded
from .prompts import build_review_prompt
from .mapper import map_comment
from .engine import ReviewEngine, EngineReviewResult, PipelineState

__all__ = [
    "parse_diff",
    "filter_files",
    "is_excluded",
    "build_review_prompt",
    "map_comment",
    "ReviewEngine",
    "EngineReviewResult",
    "PipelineState",
]
