"""Real-repository tests for ``GitRepository`` and the ``--render`` entrypoint.

Each test builds a throwaway repository with the ``git`` binary, so the
parsers are exercised against genuine log and status output.
"""

from __future__ import annotations

import io
import shutil
import subprocess
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from gitlane import cli
from gitlane.git import GitError, GitRepository
from gitlane.models import RefKind, StatusKind


def _git(root: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=root, check=True, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)


@unittest.skipIf(shutil.which("git") is None, "git is required for repository tests")
class GitRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        _git(self.root, "init", "-q", "-b", "main")
        _git(self.root, "config", "user.email", "tests@example.com")
        _git(self.root, "config", "user.name", "Tester")
        _git(self.root, "config", "commit.gpgsign", "false")
        (self.root / "app.py").write_text("print('one')\n", encoding="utf-8")
        _git(self.root, "add", "app.py")
        _git(self.root, "commit", "-q", "-m", "Initial commit")
        (self.root / "app.py").write_text("print('two')\n", encoding="utf-8")
        _git(self.root, "commit", "-q", "-am", "Second commit\n\nWith a body")
        _git(self.root, "tag", "v1")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_discover_from_subdirectory(self) -> None:
        sub = self.root / "pkg"
        sub.mkdir()

        repo = GitRepository.discover(sub)

        self.assertEqual(repo.root, self.root)

    def test_discover_outside_repository_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(GitError):
                GitRepository.discover(Path(tmp))

    def test_commits_newest_first_with_refs(self) -> None:
        repo = GitRepository.discover(self.root)

        commits = repo.commits()

        self.assertEqual([commit.summary for commit in commits], ["Second commit", "Initial commit"])
        self.assertEqual(commits[0].message, "Second commit\n\nWith a body")
        self.assertEqual(commits[0].parent_ids, (commits[1].id,))
        kinds = {ref.kind for ref in commits[0].refs}
        self.assertIn(RefKind.HEAD, kinds)
        self.assertIn(RefKind.TAG, kinds)
        self.assertEqual(len(repo.commits(max_count=1)), 1)

    def test_current_branch_and_references(self) -> None:
        repo = GitRepository.discover(self.root)

        self.assertEqual(repo.current_branch(), "main")
        names = {(ref.display_name, ref.kind) for ref in repo.references()}
        self.assertIn(("main", RefKind.BRANCH), names)
        self.assertIn(("v1", RefKind.TAG), names)

    def test_stage_unstage_and_status(self) -> None:
        repo = GitRepository.discover(self.root)
        (self.root / "app.py").write_text("print('three')\n", encoding="utf-8")
        (self.root / "notes.txt").write_text("todo\n", encoding="utf-8")

        statuses = {entry.path: entry.status for entry in repo.file_statuses()}
        self.assertEqual(statuses, {"app.py": StatusKind.MODIFIED, "notes.txt": StatusKind.UNTRACKED})

        repo.stage_file("app.py")
        statuses = {entry.path: entry.status for entry in repo.file_statuses()}
        self.assertIs(statuses["app.py"], StatusKind.MODIFIED_STAGED)

        repo.unstage_file("app.py")
        statuses = {entry.path: entry.status for entry in repo.file_statuses()}
        self.assertIs(statuses["app.py"], StatusKind.MODIFIED)

        repo.stage_all()
        self.assertTrue(all(entry.is_staged for entry in repo.file_statuses()))
        repo.unstage_all()
        self.assertFalse(any(entry.is_staged for entry in repo.file_statuses()))

    def test_diffs(self) -> None:
        repo = GitRepository.discover(self.root)
        newest, initial = repo.commits()

        self.assertIn("+print('two')", repo.commit_diff(newest))
        self.assertIn("has no parent", repo.commit_diff(initial))

        (self.root / "app.py").write_text("print('three')\n", encoding="utf-8")
        self.assertIn("+print('three')", repo.working_tree_diff("app.py"))

    def test_create_branch_and_duplicate_failure(self) -> None:
        repo = GitRepository.discover(self.root)
        initial = repo.commits()[-1]

        repo.create_branch("feature/x", initial.id)

        self.assertIn("feature/x", {ref.display_name for ref in repo.references()})
        with self.assertRaises(GitError):
            repo.create_branch("feature/x", initial.id)

    def test_checkout_detaches_head_at_commit(self) -> None:
        repo = GitRepository.discover(self.root)
        initial = repo.commits()[-1]

        repo.checkout(initial.id)

        self.assertIsNone(repo.current_branch())
        head = next(commit for commit in repo.commits() if commit.has_ref_kind(RefKind.HEAD))
        self.assertEqual(head.id, initial.id)
        self.assertEqual((self.root / "app.py").read_text(encoding="utf-8"), "print('one')\n")
        with self.assertRaises(GitError):
            repo.checkout("0" * 40)

    def test_render_flag_prints_graph(self) -> None:
        with tempfile.TemporaryDirectory() as cfg:
            buffer = io.StringIO()
            config_path = Path(cfg) / "config.json"
            with mock.patch("gitlane.runtime.config.CONFIG_PATH", config_path), redirect_stdout(buffer):
                cli.main(["--render", "--no-color", str(self.root)])

        lines = buffer.getvalue().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertIn("Second commit", lines[0])
        self.assertIn("●", lines[0])
        self.assertIn("(tags: v1)", lines[0])
        self.assertIn("Initial commit", lines[1])


if __name__ == "__main__":
    unittest.main()
