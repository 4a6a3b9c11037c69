from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Severity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


class LintIssue(BaseModel):
    severity: Severity
    file_path: str
    line_number: int
    column: int
    rule_id: str
    message_id: str
    message: str
    source: Optional[str] = None
