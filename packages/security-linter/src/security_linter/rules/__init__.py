from .base import BaseRule, EmptyOptions, RuleContext
from .no_unsafe_regexp import NEW_REGEXP_PATTERN, NoUnsafeRegExpRule

__all__ = ["BaseRule", "EmptyOptions", "NEW_REGEXP_PATTERN", "NoUnsafeRegExpRule", "RuleContext"]
