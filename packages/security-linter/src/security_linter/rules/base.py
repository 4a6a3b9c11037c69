from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Type

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import ConfigurationError
from ..models import Diagnostic, Severity

Listener = Callable[[Dict[str, Any]], None]


class EmptyOptions(BaseModel):
    """Options schema that declares no properties and rejects unknown ones."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class RuleContext:
    """Per-run state handed to a rule: validated options and the diagnostic sink."""

    def __init__(self, rule: "BaseRule", options: BaseModel):
        self.rule = rule
        self.options = options
        self.diagnostics: List[Diagnostic] = []

    def report(self, node: Dict[str, Any], message_id: str) -> None:
        if message_id not in self.rule.messages:
            raise ValueError(f"Rule '{self.rule.name}' has no message '{message_id}'")
        self.diagnostics.append(Diagnostic(node=node, message_id=message_id, message=self.rule.messages[message_id]))


class BaseRule(ABC):
    """Abstract base class for all linting rules."""

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique rule code (e.g., 'S001')."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable rule name (e.g., 'no-unsafe-regexp')."""
        pass

    @property
    @abstractmethod
    def severity(self) -> Severity:
        """Default severity for this rule."""
        pass

    @property
    @abstractmethod
    def messages(self) -> Dict[str, str]:
        """Message id to message text."""
        pass

    @property
    def rule_type(self) -> str:
        """'problem', 'suggestion' or 'layout'."""
        return "problem"

    @property
    def description(self) -> str:
        """Detailed description of what this rule checks."""
        return ""

    @property
    def category(self) -> str:
        return ""

    @property
    def options_model(self) -> Type[BaseModel]:
        return EmptyOptions

    @abstractmethod
    def create(self, context: RuleContext) -> Dict[str, Listener]:
        """Return node-type -> listener callbacks for one lint run."""
        pass

    def validate_options(self, options: Mapping[str, Any]) -> BaseModel:
        if not isinstance(options, Mapping):
            raise ConfigurationError(f"Options for rule '{self.name}' must be a table, got {type(options).__name__}")
        try:
            return self.options_model.model_validate(dict(options))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid options for rule '{self.name}': {e}") from e
