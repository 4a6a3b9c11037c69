from .engine import LinterEngine
from .errors import ConfigurationError, LinterError, SourceError
from .models import Diagnostic, InternalIssue, RuleSettings, Severity
from .registry import RuleRegistry, registry

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "InternalIssue",
    "LinterEngine",
    "LinterError",
    "RuleRegistry",
    "RuleSettings",
    "Severity",
    "SourceError",
    "registry",
]
