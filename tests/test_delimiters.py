"""Tests for the delimiter protocol and the commit-record parsers built on it."""

from conftest import HASH_A, HASH_B, log_record
from gitdriver.git.delimiters import (
    FIELD_DELIMITER,
    RECORD_DELIMITER,
    format_option,
    format_string,
    split_first_record,
    split_records,
)
from gitdriver.parsers.log import parse_commit_with_content, parse_commit_with_files, parse_log


class TestFormat:
    def test_format_string(self):
        assert format_string("%H", "%s") == f"%H{FIELD_DELIMITER}%s{RECORD_DELIMITER}"

    def test_format_option(self):
        assert format_option("%H").startswith("--format=%H")

    def test_sequences_are_distinct(self):
        assert FIELD_DELIMITER != RECORD_DELIMITER
        assert len(FIELD_DELIMITER) == len(RECORD_DELIMITER) == 2


class TestSplit:
    def test_empty(self):
        assert split_records("") == []
        assert split_records("\n\n") == []

    def test_records_then_fields(self):
        out = f"a{FIELD_DELIMITER}b{RECORD_DELIMITER}\nc{FIELD_DELIMITER}d{RECORD_DELIMITER}\n"
        assert split_records(out) == [["a", "b"], ["c", "d"]]

    def test_first_record_and_rest(self):
        fields, rest = split_first_record(f"x{FIELD_DELIMITER}y{RECORD_DELIMITER}\nfile.txt\n")
        assert fields == ["x", "y"]
        assert rest == "\nfile.txt\n"

    def test_first_record_without_delimiter(self):
        assert split_first_record("plain") == ([], "plain")


class TestCommitRecords:
    def test_multiline_body_with_lone_delimiter_chars(self):
        body = "line one\nhas \x1f unit separator\nand \x1e record separator\n\nlast"
        commits = parse_log(log_record(body=body))
        assert len(commits) == 1
        assert commits[0].body == body

    def test_root_commit_has_no_parents(self):
        (record,) = parse_log(log_record())
        assert record.parent_hashes == []
        assert record.body is None

    def test_merge_commit_parents(self):
        (record,) = parse_log(log_record(parents=f"{HASH_A} {HASH_B}"))
        assert record.parent_hashes == [HASH_A, HASH_B]

    def test_several_commits(self):
        out = log_record(HASH_A, subject="second") + "\n" + log_record(HASH_B, subject="first") + "\n"
        commits = parse_log(out)
        assert [c.subject for c in commits] == ["second", "first"]
        assert commits[0].short_hash == HASH_A[:7]
        assert commits[0].timestamp == 1700000000

    def test_empty_log(self):
        assert parse_log("") == []

    def test_commit_with_files(self):
        record, files = parse_commit_with_files(log_record() + "\n\nsrc/a.py\nsrc/b.py\n")
        assert record is not None and record.hash == HASH_A
        assert files == ["src/a.py", "src/b.py"]

    def test_commit_with_content(self):
        record, content = parse_commit_with_content(log_record() + "\n\ndiff --git a/x b/x\n")
        assert record is not None
        assert content.startswith("diff --git")
