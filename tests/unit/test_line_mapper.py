"""Unit tests for the patch line mapper."""

import pytest

from reviewbot.services.line_mapper import PatchParseError, build_line_map


class TestBuildLineMap:
    """Test suite for build_line_map."""

    def test_single_addition_between_context(self):
        """Only the added line is mapped, at its patch position."""
        patch = "@@ -1,2 +1,3 @@\n a\n+b\n c\n"

        assert build_line_map(patch) == {2: 2}

    def test_deletion_consumes_a_position(self):
        """A deletion takes a position but not a file line."""
        patch = "@@ -1,1 +1,1 @@\n-old\n+new\n"

        assert build_line_map(patch) == {1: 2}

    def test_empty_patch(self):
        assert build_line_map("") == {}

    def test_missing_patch(self):
        """Binary and rename-only files come without a patch."""
        assert build_line_map(None) == {}

    def test_context_only_patch(self):
        patch = "@@ -10,3 +10,3 @@\n one\n two\n three"

        assert build_line_map(patch) == {}

    def test_deletions_only_patch(self):
        patch = "@@ -4,2 +3,0 @@\n-gone\n-also gone"

        assert build_line_map(patch) == {}

    def test_hunk_start_offsets_file_lines(self):
        """File lines start from the hunk's new-file start."""
        patch = "@@ -20,2 +20,3 @@ function main() {\n const a = 1;\n+const b = 2;\n return a;"

        assert build_line_map(patch) == {21: 2}

    def test_position_keeps_counting_across_hunks(self):
        """Hunk headers reset the file line but not the diff position."""
        patch = (
            "@@ -1,2 +1,3 @@\n"
            " first\n"
            "+added at 2\n"
            " third\n"
            "@@ -10,2 +11,3 @@\n"
            " eleventh\n"
            "+added at 12\n"
            " thirteenth"
        )

        assert build_line_map(patch) == {2: 2, 12: 5}

    def test_new_file_patch(self):
        """Every line of a newly added file is mapped."""
        patch = "@@ -0,0 +1,3 @@\n+const a = 1;\n+const b = 2;\n+module.exports = { a, b };"

        assert build_line_map(patch) == {1: 1, 2: 2, 3: 3}

    def test_mixed_changes(self):
        patch = (
            "@@ -1,5 +1,5 @@\n"
            " line 1\n"
            "-line 2\n"
            "-line 3\n"
            "+line 2 changed\n"
            "+line 3 changed\n"
            "+line 3.5\n"
            " line 4\n"
            "-line 5"
        )

        assert build_line_map(patch) == {2: 4, 3: 5, 4: 6}

    def test_blank_line_counts_as_context(self):
        """A line with no prefix at all still advances both counters."""
        patch = "@@ -1,3 +1,4 @@\n a\n\n+c\n d"

        assert build_line_map(patch) == {3: 3}

    def test_hunk_header_without_counts(self):
        """Single-line ranges omit the count."""
        patch = "@@ -1 +1 @@\n-old\n+new"

        assert build_line_map(patch) == {1: 2}

    def test_no_newline_marker_does_not_shift_following_lines(self):
        patch = (
            "@@ -1,1 +1,2 @@\n"
            "-last\n"
            "\\ No newline at end of file\n"
            "+last\n"
            "+appended"
        )

        assert build_line_map(patch) == {1: 3, 2: 4}

    def test_malformed_hunk_header(self):
        with pytest.raises(PatchParseError):
            build_line_map("@@ -1,2 @@\n+oops")

    def test_malformed_hunk_header_is_value_error(self):
        with pytest.raises(ValueError):
            build_line_map("@@ garbage @@\n+oops")

    def test_same_patch_same_map(self):
        patch = "@@ -3,4 +3,5 @@\n a\n-b\n+B\n+C\n d"

        assert build_line_map(patch) == build_line_map(patch)
