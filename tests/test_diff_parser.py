"""Tests for the unified diff parser and --stat totals."""

from gitdriver.models.results import FileStatus
from gitdriver.parsers.diff import DiffParser, has_binary, parse_diff_files, parse_diff_stat, parse_stat_files


class TestBasicParsing:
    def test_modified_and_binary(self, sample_diff_modified):
        files = DiffParser(sample_diff_modified).files()
        assert [f.path for f in files] == ["hello.py", "image.png"]
        assert files[0].status == FileStatus.MODIFIED
        assert files[0].binary is False
        assert files[1].status == FileStatus.ADDED
        assert files[1].binary is True

    def test_binary_flag(self, sample_diff_modified):
        assert has_binary(sample_diff_modified) is True
        assert has_binary("diff --git a/x b/x\n") is False

    def test_deleted(self, sample_diff_deleted):
        (f,) = parse_diff_files(sample_diff_deleted)
        assert f.status == FileStatus.DELETED
        assert f.path == "gone.txt"


class TestEdgeCases:
    def test_rename_tracked(self, sample_diff_rename):
        (f,) = parse_diff_files(sample_diff_rename)
        assert f.path == "new_name.py"
        assert f.old_path == "old_name.py"
        assert f.status == FileStatus.RENAMED

    def test_mode_only_change(self, sample_diff_mode_only):
        (f,) = parse_diff_files(sample_diff_mode_only)
        assert f.status == FileStatus.MODE_CHANGED
        assert f.old_path is None

    def test_mode_change_with_content_is_modified(self):
        diff = (
            "diff --git a/run.sh b/run.sh\n"
            "old mode 100644\n"
            "new mode 100755\n"
            "index 1234567..abcdef0\n"
            "--- a/run.sh\n"
            "+++ b/run.sh\n"
            "@@ -1 +1 @@\n"
            "-echo hi\n"
            "+echo hello\n"
        )
        (f,) = parse_diff_files(diff)
        assert f.status == FileStatus.MODIFIED

    def test_copy(self):
        diff = (
            "diff --git a/a.py b/b.py\n"
            "similarity index 100%\n"
            "copy from a.py\n"
            "copy to b.py\n"
        )
        (f,) = parse_diff_files(diff)
        assert f.status == FileStatus.COPIED
        assert (f.old_path, f.path) == ("a.py", "b.py")

    def test_empty(self):
        assert parse_diff_files("") == []


class TestStat:
    def test_summary_line(self):
        stat = " a.py | 3 ++-\n b.png | Bin 0 -> 12 bytes\n 2 files changed, 2 insertions(+), 1 deletion(-)\n"
        totals = parse_diff_stat(stat)
        assert (totals.files_changed, totals.insertions, totals.deletions) == (2, 2, 1)
        assert parse_stat_files(stat) == ["a.py", "b.png"]

    def test_insertions_only(self):
        totals = parse_diff_stat(" 1 file changed, 4 insertions(+)\n")
        assert (totals.files_changed, totals.insertions, totals.deletions) == (1, 4, 0)

    def test_empty(self):
        totals = parse_diff_stat("")
        assert (totals.files_changed, totals.insertions, totals.deletions) == (0, 0, 0)
        assert parse_stat_files("") == []
