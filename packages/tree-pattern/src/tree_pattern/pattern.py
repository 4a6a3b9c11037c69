"""Pattern model for declarative tree matching.

A pattern is plain nested data shaped like a filtered view of the target tree:

* a ``str``, ``int``, ``float``, ``bool`` or ``None`` is a literal matcher,
* a ``dict`` is a nested (subset) pattern keyed by target field names,
* a ``list`` or ``tuple`` is a positional sequence pattern,
* a :class:`Tag` is a capture point that matches anything.

Example::

    NEW_REGEXP = TreePattern({
        "type": "NewExpression",
        "callee": {"type": "Identifier", "name": "RegExp"},
        "arguments": tag("constructor_args"),
    })
"""

from dataclasses import dataclass
from typing import Any, Iterator, MutableMapping, Optional

LITERAL_TYPES = (str, int, float, bool, type(None))
SEQUENCE_TYPES = (list, tuple)


class PatternError(ValueError):
    """Raised when a pattern tree is malformed."""


@dataclass(frozen=True)
class Tag:
    """Named capture point. Always a leaf of the pattern tree."""

    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise PatternError(f"Tag name must be a non-empty string, got {self.name!r}")

    def __repr__(self) -> str:
        return f"tag({self.name!r})"


def tag(name: str) -> Tag:
    """Create a capture tag that binds whatever sits at its position."""
    return Tag(name)


def is_literal(value: Any) -> bool:
    return isinstance(value, LITERAL_TYPES)


def iter_tags(pattern: Any) -> Iterator[Tag]:
    """Yield every tag of ``pattern`` in matching (depth-first, left-to-right) order.

    Walks with an explicit stack so that validation never depends on the
    interpreter recursion limit. Raises :class:`PatternError` on any node that
    is not a supported pattern kind.
    """
    stack = [(pattern, "$")]
    while stack:
        node, path = stack.pop()
        if isinstance(node, Tag):
            yield node
        elif is_literal(node):
            continue
        elif isinstance(node, dict):
            children = []
            for key, sub in node.items():
                if not isinstance(key, str):
                    raise PatternError(f"{path}: pattern keys must be strings, got {key!r}")
                children.append((sub, f"{path}.{key}"))
            stack.extend(reversed(children))
        elif isinstance(node, SEQUENCE_TYPES):
            stack.extend(reversed([(sub, f"{path}[{i}]") for i, sub in enumerate(node)]))
        else:
            raise PatternError(f"{path}: unsupported pattern node of type {type(node).__name__}")


class TreePattern:
    """A validated pattern tree, built once and reused across many matches."""

    def __init__(self, pattern: Any, unique_tags: bool = False):
        self.pattern = pattern
        self.tags: list[str] = []

        for found in iter_tags(pattern):
            if unique_tags and found.name in self.tags:
                raise PatternError(f"Tag {found.name!r} appears more than once in the pattern")
            self.tags.append(found.name)

    @staticmethod
    def tag(name: str) -> Tag:
        return Tag(name)

    def match(self, target: Any, captures: Optional[MutableMapping[str, Any]] = None) -> bool:
        """Test ``target`` against this pattern, recording captures into ``captures``."""
        from .matcher import match

        return match(target, self.pattern, captures)

    def __repr__(self) -> str:
        return f"TreePattern({self.pattern!r})"
