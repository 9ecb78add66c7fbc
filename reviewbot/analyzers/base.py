"""
Base interface for static analyzers.

An analyzer receives a file's full content and reports findings against its
line numbers. How it finds them is its own business.
"""

from abc import ABC, abstractmethod
from typing import List

from reviewbot.models.finding import Finding


class AnalyzerError(Exception):
    """Raised when an analyzer cannot produce findings for a file."""
    pass


class Analyzer(ABC):
    """Base interface for static analyzers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the analyzer name (e.g., 'eslint')."""
        pass

    @abstractmethod
    async def analyze(self, content: str, filename: str) -> List[Finding]:
        """
        Analyze file content.

        Args:
            content: Full content of the file at the reviewed revision
            filename: Path of the file, used to pick parser and rules

        Returns:
            Findings, empty if the file is clean

        Raises:
            AnalyzerError: If the analysis itself fails
        """
        pass
