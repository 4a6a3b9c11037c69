from typing import Iterable, Optional

from .errors import ConfigurationError
from .rules.base import BaseRule


class RuleRegistry:
    """Registry for managing and loading linting rules"""

    def __init__(self):
        self._rules: list[BaseRule] = []
        self._load_builtin_rules()

    def register(self, rule: BaseRule):
        if self.get_rule(rule.name) or self.get_rule(rule.rule_id):
            raise ValueError(f"Rule '{rule.name}' ({rule.rule_id}) is already registered")
        self._rules.append(rule)

    def get_all_rules(self) -> list[BaseRule]:
        return list(self._rules)

    def get_rule(self, key: str) -> Optional[BaseRule]:
        """Look up a rule by name or code"""
        for rule in self._rules:
            if key in (rule.name, rule.rule_id):
                return rule
        return None

    def get_enabled_rules(self, select: Iterable[str] = ("S",), ignore: Iterable[str] = ()) -> list[BaseRule]:
        """Rules matching any 'select' entry and no 'ignore' entry.

        An entry matches a rule by exact name or as a prefix of its code.
        """
        select, ignore = list(select), list(ignore)
        for entry in select + ignore:
            if not any(self._matches(rule, entry) for rule in self._rules):
                raise ConfigurationError(f"Unknown rule or rule prefix: '{entry}'")

        return [
            rule
            for rule in self._rules
            if any(self._matches(rule, entry) for entry in select)
            and not any(self._matches(rule, entry) for entry in ignore)
        ]

    @staticmethod
    def _matches(rule: BaseRule, entry: str) -> bool:
        return entry == rule.name or rule.rule_id.startswith(entry)

    def _load_builtin_rules(self):
        from .rules.no_unsafe_regexp import NoUnsafeRegExpRule

        self.register(NoUnsafeRegExpRule())


registry = RuleRegistry()
