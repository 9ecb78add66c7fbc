"""
Patch line mapper.

GitHub anchors inline pull request comments by *position*: the 1-based line
offset inside a file's patch, not the line number in the file. This module
turns a unified-diff patch into a map from post-change file line numbers to
those positions.

Counting rules:
- hunk headers (``@@ -a,b +c,d @@``) reset the file line to ``c - 1`` and are
  not counted as a position
- every other patch line consumes one position, across all hunks
- ``-`` lines do not advance the file line
- ``+`` lines advance the file line and are recorded
- context lines advance the file line but are not recorded; only added lines
  are commented on
"""

import re
from typing import Dict, Optional

HUNK_HEADER_PREFIX = "@@"
NO_NEWLINE_MARKER = "\\"

_NEW_START_RE = re.compile(r"\+(\d+)")


class PatchParseError(ValueError):
    """Raised when a hunk header carries no new-file start line."""
    pass


def _hunk_new_start(header: str) -> int:
    match = _NEW_START_RE.search(header)
    if match is None:
        raise PatchParseError(f"Malformed hunk header: {header!r}")
    return int(match.group(1))


def build_line_map(patch: Optional[str]) -> Dict[int, int]:
    """
    Map added file lines to their diff position in a patch.

    Args:
        patch: Unified-diff fragment for a single file, as returned in the
            ``patch`` field of GitHub's commit files. May be empty or None for
            binary and rename-only changes.

    Returns:
        Dictionary of {file line number: diff position}. Empty when the patch
        adds no lines.

    Raises:
        PatchParseError: If a hunk header has no ``+<start>`` range

    Example:
        >>> build_line_map("@@ -1,1 +1,1 @@\\n-old\\n+new\\n")
        {1: 2}
    """
    line_map: Dict[int, int] = {}
    if not patch:
        return line_map

    diff_position = 0
    file_line = 0

    for line in patch.split("\n"):
        if line.startswith(HUNK_HEADER_PREFIX):
            file_line = _hunk_new_start(line) - 1
            continue

        diff_position += 1

        if line.startswith("-"):
            continue
        if line.startswith(NO_NEWLINE_MARKER):
            # "\ No newline at end of file" belongs to the previous line
            continue

        file_line += 1
        if line.startswith("+"):
            line_map[file_line] = diff_position

    return line_map
