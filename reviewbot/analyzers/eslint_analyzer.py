"""
ESLint analyzer.

Runs the ESLint CLI on file content passed through stdin and converts its JSON
report into findings.
"""

import asyncio
import json
import shlex
from typing import Any, Dict, List, Optional, Sequence, Union

from reviewbot.analyzers.base import Analyzer, AnalyzerError
from reviewbot.models.finding import DEFAULT_RULE_ID, Finding, FindingSeverity
from reviewbot.utils.logging import get_logger

logger = get_logger(__name__)

# ESLint exits 1 when it found problems, 2 on configuration or internal errors
_SUCCESS_EXIT_CODES = (0, 1)

_SEVERITY_MAP = {
    1: FindingSeverity.WARNING,
    2: FindingSeverity.ERROR,
}


class ESLintAnalyzer(Analyzer):
    """Lints JavaScript with the ESLint command line interface."""

    def __init__(
        self,
        command: Union[str, Sequence[str]] = "eslint",
        timeout: float = 60.0,
        cwd: Optional[str] = None,
        max_concurrency: int = 4,
    ):
        """
        Initialize the ESLint analyzer.

        Args:
            command: ESLint executable, optionally with extra arguments
                (e.g. "npx eslint --no-eslintrc")
            timeout: Seconds to wait for one file before giving up
            cwd: Working directory for ESLint, where it looks up its config
            max_concurrency: Maximum number of ESLint processes alive at once
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self.command = shlex.split(command) if isinstance(command, str) else list(command)
        self.timeout = timeout
        self.cwd = cwd
        self.max_concurrency = max_concurrency
        self._semaphore = asyncio.Semaphore(max_concurrency)

    @property
    def name(self) -> str:
        return "eslint"

    def _build_args(self, filename: str) -> List[str]:
        return [*self.command, "--stdin", "--stdin-filename", filename, "--format", "json"]

    async def analyze(self, content: str, filename: str) -> List[Finding]:
        args = self._build_args(filename)

        async with self._semaphore:
            try:
                process = await asyncio.create_subprocess_exec(
                    *args,
                    stdin=asyncio.subprocess.PIPE,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    cwd=self.cwd,
                )
            except OSError as e:
                raise AnalyzerError(f"Could not start {self.command[0]}: {e}") from e

            try:
                stdout, stderr = await asyncio.wait_for(
                    process.communicate(content.encode("utf-8")),
                    timeout=self.timeout,
                )
            except asyncio.TimeoutError as e:
                raise AnalyzerError(f"ESLint timed out after {self.timeout}s on {filename}") from e
            finally:
                # Timed out or cancelled: the child must not outlive this call
                if process.returncode is None:
                    process.kill()
                    await process.wait()

        if process.returncode not in _SUCCESS_EXIT_CODES:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise AnalyzerError(f"ESLint exited with code {process.returncode} on {filename}: {detail}")

        findings = parse_eslint_report(stdout.decode("utf-8", errors="replace"))
        logger.debug(f"ESLint reported {len(findings)} findings", extra={"filename": filename})
        return findings


def parse_eslint_report(output: str) -> List[Finding]:
    """
    Convert ESLint's JSON formatter output into findings.

    Only the first result is read, as a single file is linted per run.
    Messages with no line (file-level problems) cannot be anchored and are dropped.

    Raises:
        AnalyzerError: If the output is not an ESLint JSON report
    """
    try:
        report = json.loads(output)
    except json.JSONDecodeError as e:
        raise AnalyzerError(f"Unparsable ESLint output: {e}") from e

    if not isinstance(report, list):
        raise AnalyzerError("ESLint report is not a list of results")
    if not report:
        return []

    messages: List[Dict[str, Any]] = report[0].get("messages") or []
    findings = []
    for message in messages:
        line = message.get("line")
        if not isinstance(line, int):
            continue
        findings.append(
            Finding(
                rule_id=message.get("ruleId") or DEFAULT_RULE_ID,
                message=message.get("message", ""),
                line=line,
                severity=_SEVERITY_MAP.get(message.get("severity"), FindingSeverity.WARNING),
            )
        )
    return findings
