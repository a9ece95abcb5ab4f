"""Tests for gyst.git package."""

import pytest

from gyst.git import (
    GitError,
    IndexLockConflictError,
    NoStagedChangesError,
    RepositoryError,
    collect,
    create_commit,
    get_repo_root,
    has_staged_changes,
    has_unstaged_changes,
    parse_name_status,
    parse_numstat,
    stage_tracked_changes,
)
from gyst.git.runner import _classify_failure
from gyst.git.status import rename_args
from gyst.models import TRUNCATION_MARKER_PREFIX

from conftest import run_git


class TestParseNameStatus:
    """Tests for parse_name_status."""

    def test_categorizes_simple_statuses(self):
        output = "A\0new.py\0M\0lib.py\0D\0gone.py\0T\0link\0"
        groups = parse_name_status(output)

        assert groups["added"] == {"new.py"}
        assert groups["modified"] == {"lib.py", "link"}
        assert groups["deleted"] == {"gone.py"}
        assert groups["renamed"] == set()

    def test_rename_carries_both_paths(self):
        groups = parse_name_status("R087\0old/name.py\0new/name.py\0")
        assert groups["renamed"] == {("old/name.py", "new/name.py")}

    def test_copy_counts_as_added(self):
        groups = parse_name_status("C100\0src.py\0copy.py\0")
        assert groups["added"] == {"copy.py"}
        assert groups["renamed"] == set()

    def test_paths_with_spaces(self):
        groups = parse_name_status("M\0docs/read me.md\0")
        assert groups["modified"] == {"docs/read me.md"}

    def test_empty_output(self):
        groups = parse_name_status("")
        assert not any(groups.values())


class TestParseNumstat:
    """Tests for parse_numstat."""

    def test_sums_lines(self):
        stats = parse_numstat("5\t2\tlib.py\n1\t0\tREADME.md")
        assert stats.files_changed == 2
        assert stats.insertions == 6
        assert stats.deletions == 2

    def test_binary_files_count_as_zero_lines(self):
        stats = parse_numstat("-\t-\tlogo.png\n3\t1\tapp.py")
        assert stats.files_changed == 2
        assert stats.insertions == 3
        assert stats.deletions == 1


class TestRenameArgs:
    """Tests for rename_args."""

    def test_threshold(self):
        assert rename_args(50) == ["-M50%"]

    def test_zero_disables_renames(self):
        assert rename_args(0) == ["--no-renames"]


class TestClassifyFailure:
    """Tests for _classify_failure."""

    def test_index_lock(self):
        err = _classify_failure(
            ["commit"], "fatal: Unable to create '/repo/.git/index.lock': File exists."
        )
        assert isinstance(err, IndexLockConflictError)

    def test_not_a_repository(self):
        err = _classify_failure(["status"], "fatal: not a git repository (or any parent)")
        assert isinstance(err, RepositoryError)

    def test_corrupt_index(self):
        err = _classify_failure(["diff"], "error: bad signature 0x00000000\nfatal: index file corrupt")
        assert isinstance(err, RepositoryError)

    def test_other_failure(self):
        err = _classify_failure(["push"], "fatal: no upstream configured")
        assert type(err) is GitError
        assert "git push" in str(err)


class TestRepository:
    """Tests against a real temporary repository."""

    def test_get_repo_root(self, git_repo):
        (git_repo / "sub").mkdir()
        assert get_repo_root(git_repo / "sub") == git_repo

    def test_get_repo_root_outside_repo(self, temp_dir):
        with pytest.raises(RepositoryError):
            get_repo_root(temp_dir)

    def test_no_staged_changes(self, git_repo):
        with pytest.raises(NoStagedChangesError):
            collect(git_repo)

    def test_collect_categorizes_changes(self, git_repo):
        (git_repo / "app.py").write_text("def main():\n    return 2\n\n\ndef helper():\n    pass\n")
        (git_repo / "new.py").write_text("VALUE = 1\n")
        run_git(git_repo, "add", "app.py", "new.py")
        run_git(git_repo, "mv", "README.md", "docs.md")

        changes, diff = collect(git_repo)

        assert changes.added == {"new.py"}
        assert changes.modified == {"app.py"}
        assert changes.deleted == frozenset()
        assert changes.renamed == {("README.md", "docs.md")}
        assert changes.stats.files_changed == 3
        assert changes.stats.insertions >= 5
        assert not diff.truncated
        assert "def helper():" in diff.text

    def test_collect_ignores_unstaged_and_untracked(self, git_repo):
        (git_repo / "app.py").write_text("def main():\n    return 2\n")
        run_git(git_repo, "add", "app.py")
        (git_repo / "README.md").write_text("# demo\n\nUNSTAGED EDIT\n")
        (git_repo / "scratch.txt").write_text("UNTRACKED NOTE\n")

        changes, diff = collect(git_repo)

        assert changes.modified == {"app.py"}
        assert changes.added == frozenset()
        assert changes.deleted == frozenset()
        assert changes.renamed == frozenset()
        assert changes.stats.files_changed == 1
        assert "app.py" in diff.text
        assert "README.md" not in diff.text
        assert "UNSTAGED EDIT" not in diff.text
        assert "scratch.txt" not in diff.text
        assert "UNTRACKED NOTE" not in diff.text

    def test_diff_keeps_trailing_blank_context_line(self, git_repo):
        (git_repo / "notes.txt").write_text("a\nb\nc\nd\n \n")
        run_git(git_repo, "add", "notes.txt")
        run_git(git_repo, "commit", "-q", "-m", "add notes")
        (git_repo / "notes.txt").write_text("a\nb\nC\nd\n \n")
        run_git(git_repo, "add", "notes.txt")

        _, diff = collect(git_repo)

        # 4 file header lines, 1 hunk header, 6 hunk lines
        assert diff.total_lines == 11
        assert diff.text.split("\n")[-1] == "  "

    def test_rename_threshold_zero_reports_delete_and_add(self, git_repo):
        run_git(git_repo, "mv", "README.md", "docs.md")

        changes, _ = collect(git_repo, rename_threshold=0)

        assert changes.renamed == frozenset()
        assert changes.deleted == {"README.md"}
        assert changes.added == {"docs.md"}

    def test_deleted_file(self, git_repo):
        run_git(git_repo, "rm", "-q", "app.py")

        changes, _ = collect(git_repo)

        assert changes.deleted == {"app.py"}

    def test_diff_truncation(self, git_repo):
        (git_repo / "big.txt").write_text("".join(f"line {i}\n" for i in range(200)))
        run_git(git_repo, "add", "big.txt")

        _, diff = collect(git_repo, max_diff_size=20)

        lines = diff.text.splitlines()
        assert diff.truncated
        assert len(lines) == 21
        assert lines[-1].startswith(TRUNCATION_MARKER_PREFIX)
        assert diff.total_lines > 200

    def test_staged_and_unstaged_checks(self, git_repo):
        assert not has_staged_changes(git_repo)
        assert not has_unstaged_changes(git_repo)

        (git_repo / "app.py").write_text("def main():\n    return 3\n")
        assert has_unstaged_changes(git_repo)

        stage_tracked_changes(git_repo)
        assert has_staged_changes(git_repo)
        assert not has_unstaged_changes(git_repo)

    def test_stage_tracked_changes_ignores_untracked(self, git_repo):
        (git_repo / "untracked.py").write_text("x = 1\n")
        (git_repo / "app.py").write_text("def main():\n    return 4\n")

        stage_tracked_changes(git_repo)

        changes, _ = collect(git_repo)
        assert changes.modified == {"app.py"}
        assert changes.added == frozenset()

    def test_create_commit_records_message_verbatim(self, git_repo):
        (git_repo / "app.py").write_text("def main():\n    return 5\n")
        run_git(git_repo, "add", "app.py")
        message = "fix(app): return five\n\nThe caller expects 5.\n# not a comment here"

        sha = create_commit(message, git_repo)

        assert sha == run_git(git_repo, "rev-parse", "--short", "HEAD")
        assert run_git(git_repo, "log", "-1", "--format=%B") == message

    def test_create_commit_with_index_lock(self, git_repo):
        (git_repo / "app.py").write_text("def main():\n    return 6\n")
        run_git(git_repo, "add", "app.py")
        (git_repo / ".git" / "index.lock").write_text("")

        with pytest.raises(IndexLockConflictError):
            create_commit("fix: locked", git_repo)
