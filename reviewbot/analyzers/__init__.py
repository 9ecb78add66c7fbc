"""Static analyzers package."""

from reviewbot.analyzers.base import Analyzer, AnalyzerError
from reviewbot.analyzers.eslint_analyzer import ESLintAnalyzer, parse_eslint_report
from reviewbot.analyzers.pattern_analyzer import PatternAnalyzer, PatternRule, load_rules


def get_analyzer(settings=None) -> Analyzer:
    """
    Factory function to create the configured analyzer.

    Returns:
        Analyzer instance configured with application settings

    Raises:
        ValueError: If the configured analyzer name is unknown
    """
    if settings is None:
        from reviewbot.config import get_settings
        settings = get_settings()

    if settings.analyzer == "eslint":
        return ESLintAnalyzer(
            command=settings.eslint_command,
            timeout=settings.analyzer_timeout_seconds,
            cwd=settings.eslint_cwd,
            max_concurrency=settings.analyzer_concurrency,
        )
    if settings.analyzer == "pattern":
        if settings.pattern_rules_path:
            return PatternAnalyzer(load_rules(settings.pattern_rules_path))
        return PatternAnalyzer()

    raise ValueError(f"Unknown analyzer: {settings.analyzer}")


__all__ = [
    "Analyzer",
    "AnalyzerError",
    "ESLintAnalyzer",
    "PatternAnalyzer",
    "PatternRule",
    "get_analyzer",
    "load_rules",
    "parse_eslint_report",
]
