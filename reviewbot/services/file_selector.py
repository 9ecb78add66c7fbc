"""File selection by filename pattern."""

import re
from typing import Iterable, List, Pattern, Union

from reviewbot.models.pull_request import ChangedFile

DEFAULT_FILE_FILTER = r"\.jsx?$"


class FileSelector:
    """Keeps the changed files the analyzer knows how to handle."""

    def __init__(self, pattern: Union[str, Pattern[str]] = DEFAULT_FILE_FILTER):
        # re.error surfaces a bad pattern at startup rather than per event
        self.pattern: Pattern[str] = re.compile(pattern) if isinstance(pattern, str) else pattern

    def matches(self, filename: str) -> bool:
        return self.pattern.search(filename) is not None

    def select_files(self, files: Iterable[ChangedFile]) -> List[ChangedFile]:
        """Return the files whose name matches the pattern, in their original order."""
        return [changed for changed in files if self.matches(changed.filename)]
