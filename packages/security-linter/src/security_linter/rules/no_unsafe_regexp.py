from typing import Any, Dict

from tree_pattern import TreePattern, tag

from ..models import Severity
from .base import BaseRule, Listener, RuleContext

# Matches an expression like this:
#   new RegExp('hello');
#
# Tree:
#   {
#     "type": "NewExpression",
#     "callee": {"type": "Identifier", "name": "RegExp"},
#     "arguments": [{"type": "Literal", "raw": "'hello'", "value": "hello"}]
#   }
NEW_REGEXP_PATTERN = TreePattern(
    {
        "type": "NewExpression",
        "callee": {"type": "Identifier", "name": "RegExp"},
        "arguments": tag("constructor_args"),
    }
)

UNSAFE_REGEXP = "error-unsafe-regexp"


class NoUnsafeRegExpRule(BaseRule):
    """Requires regular expressions to be constructed from string constants."""

    @property
    def rule_id(self) -> str:
        return "S001"

    @property
    def name(self) -> str:
        return "no-unsafe-regexp"

    @property
    def severity(self) -> Severity:
        return Severity.WARNING

    @property
    def description(self) -> str:
        return (
            "Requires regular expressions to be constructed from string constants rather than dynamically"
            " building strings at runtime."
        )

    @property
    def category(self) -> str:
        return "Best Practices"

    @property
    def messages(self) -> Dict[str, str]:
        return {
            UNSAFE_REGEXP: (
                "Regular expressions should be constructed from string constants. Dynamically building strings"
                " at runtime may introduce security vulnerabilities, performance concerns, and bugs involving"
                " incorrect escaping of special characters."
            )
        }

    def create(self, context: RuleContext) -> Dict[str, Listener]:
        def new_expression(node: Dict[str, Any]) -> None:
            captures: Dict[str, Any] = {}
            if not NEW_REGEXP_PATTERN.match(node, captures):
                return

            args = captures.get("constructor_args")
            if not isinstance(args, (list, tuple)) or not args:
                return

            # Kind check only: any Literal node (string, number, regex...) is accepted.
            if args[0].get("type") != "Literal":
                context.report(node, UNSAFE_REGEXP)

        return {"NewExpression": new_expression}
