from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Diagnostic:
    """A rule's decision about one visited node, before it is placed in a file"""

    node: Dict[str, Any]
    message_id: str
    message: str


@dataclass
class InternalIssue:
    """Internal representation of a linting issue"""

    file_path: Path
    line: int
    rule_id: str
    message: str
    severity: Severity
    message_id: str
    column: int = 0
    context: str | None = None


@dataclass
class RuleSettings:
    """Per-rule configuration: an optional severity override and raw options"""

    severity: Optional[Severity] = None
    options: Dict[str, Any] = field(default_factory=dict)
