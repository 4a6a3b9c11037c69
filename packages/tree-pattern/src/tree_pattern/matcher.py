"""Structural matcher: walks target and pattern in lockstep."""

import logging
from collections.abc import Mapping
from typing import Any, MutableMapping, Optional

from .pattern import LITERAL_TYPES, SEQUENCE_TYPES, PatternError, Tag, TreePattern

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 200

_MISSING = object()


def match(
    target: Any,
    pattern: Any,
    captures: Optional[MutableMapping[str, Any]] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> bool:
    """Return True if ``target`` structurally matches ``pattern``.

    Tags bind their target value into ``captures`` as they are reached. The
    table is not rolled back when a later branch fails, so read it only after
    a True result. A mismatch, including a missing field, is never an error.
    """
    if captures is None:
        captures = {}
    if isinstance(pattern, TreePattern):
        pattern = pattern.pattern
    return _match(target, pattern, captures, 0, max_depth)


def _match(target: Any, pattern: Any, captures: MutableMapping[str, Any], depth: int, max_depth: int) -> bool:
    if depth > max_depth:
        logger.debug("Pattern nesting exceeds max_depth=%d, treating as mismatch", max_depth)
        return False

    if isinstance(pattern, Tag):
        captures[pattern.name] = target
        return True

    if isinstance(pattern, LITERAL_TYPES):
        return type(target) is type(pattern) and target == pattern

    if isinstance(pattern, SEQUENCE_TYPES):
        if not isinstance(target, SEQUENCE_TYPES) or len(target) != len(pattern):
            return False
        for sub_target, sub_pattern in zip(target, pattern):
            if not _match(sub_target, sub_pattern, captures, depth + 1, max_depth):
                return False
        return True

    if isinstance(pattern, dict):
        if not _is_structured(target):
            return False
        for key, sub_pattern in pattern.items():
            value = _get_field(target, key)
            if value is _MISSING:
                return False
            if not _match(value, sub_pattern, captures, depth + 1, max_depth):
                return False
        return True

    raise PatternError(f"Unsupported pattern node of type {type(pattern).__name__}")


def _is_structured(target: Any) -> bool:
    if isinstance(target, Mapping):
        return True
    return not isinstance(target, LITERAL_TYPES + SEQUENCE_TYPES + (bytes,))


def _get_field(target: Any, key: Any) -> Any:
    """Read one named field from a structured target, or return _MISSING."""
    if isinstance(target, Mapping):
        return target[key] if key in target else _MISSING
    if not isinstance(key, str) or not _is_structured(target):
        return _MISSING
    return getattr(target, key, _MISSING)


class MatchTree:
    """Namespace for the matching entry points."""

    tag = staticmethod(TreePattern.tag)
    match = staticmethod(match)
