"""
Pattern analyzer.

Applies line-level regular expression rules loaded from a YAML file. Needs no
external tooling, which makes it a fallback when ESLint is not installed.

Rules file format:

    name: javascript-basics
    version: "1.0"
    rules:
      - id: no-debugger
        pattern: '\\bdebugger\\b'
        message: "Unexpected 'debugger' statement."
        severity: error             # warning (default) or error
        extensions: [".js", ".jsx"] # optional; all files when omitted
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Union

import yaml

from reviewbot.analyzers.base import Analyzer
from reviewbot.models.finding import Finding, FindingSeverity
from reviewbot.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent / "rules.yaml"


@dataclass(frozen=True)
class PatternRule:
    """A compiled line-level rule."""

    rule_id: str
    pattern: Pattern[str]
    message: str
    severity: FindingSeverity = FindingSeverity.WARNING
    extensions: Optional[tuple] = None

    def applies_to(self, filename: str) -> bool:
        if not self.extensions:
            return True
        return Path(filename).suffix in self.extensions


def load_rules(path: Union[str, Path] = DEFAULT_RULES_PATH) -> List[PatternRule]:
    """
    Load and compile rules from a YAML file.

    Raises:
        FileNotFoundError: If the rules file does not exist
        yaml.YAMLError: If the file is not valid YAML
        ValueError: If a rule misses a required field or has a bad pattern
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found: {path}")

    with open(path, "r") as f:
        config: Dict[str, Any] = yaml.safe_load(f) or {}

    rules = []
    for index, raw in enumerate(config.get("rules") or []):
        for field in ("id", "pattern", "message"):
            if field not in raw:
                raise ValueError(f"Rule #{index} in {path} is missing required field '{field}'")
        try:
            compiled = re.compile(raw["pattern"])
        except re.error as e:
            raise ValueError(f"Rule '{raw['id']}' in {path} has an invalid pattern: {e}") from e

        extensions = raw.get("extensions")
        rules.append(
            PatternRule(
                rule_id=raw["id"],
                pattern=compiled,
                message=raw["message"],
                severity=FindingSeverity(raw.get("severity", FindingSeverity.WARNING.value)),
                extensions=tuple(extensions) if extensions else None,
            )
        )

    logger.info(f"Loaded {len(rules)} pattern rules from {path}")
    return rules


class PatternAnalyzer(Analyzer):
    """Reports one finding per rule per matching line."""

    def __init__(self, rules: Optional[List[PatternRule]] = None):
        self.rules = rules if rules is not None else load_rules()

    @property
    def name(self) -> str:
        return "pattern"

    async def analyze(self, content: str, filename: str) -> List[Finding]:
        rules = [rule for rule in self.rules if rule.applies_to(filename)]
        if not rules:
            return []

        findings = []
        for line_number, line in enumerate(content.splitlines(), start=1):
            for rule in rules:
                if rule.pattern.search(line):
                    findings.append(
                        Finding(
                            rule_id=rule.rule_id,
                            message=rule.message,
                            line=line_number,
                            severity=rule.severity,
                        )
                    )
        return findings
