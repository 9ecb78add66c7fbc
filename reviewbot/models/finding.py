"""Analyzer finding data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

# Label used when the analyzer reports a problem without a rule id
DEFAULT_RULE_ID = "Eslint"


class FindingSeverity(str, Enum):
    """Severity level reported by the analyzer."""

    WARNING = "warning"
    ERROR = "error"


class Finding(BaseModel):
    """A single problem reported by the analyzer on a file line."""

    model_config = ConfigDict(frozen=True)

    rule_id: str = DEFAULT_RULE_ID
    message: str
    line: int  # 1-indexed line in the post-change file
    severity: FindingSeverity = FindingSeverity.WARNING
