from .matcher import DEFAULT_MAX_DEPTH, MatchTree, match
from .pattern import PatternError, Tag, TreePattern, iter_tags, tag

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MatchTree",
    "PatternError",
    "Tag",
    "TreePattern",
    "iter_tags",
    "match",
    "tag",
]
