"""Process-invocation layer that shells out to the ``git`` binary.

Fetches commits, references, working-tree status and diffs, and performs the
staging/branch mutations requested by the UI. Every failure surfaces as
``GitError`` so the state machine can turn it into a status message.
"""

from __future__ import annotations

import logging
import subprocess
from datetime import datetime, timezone
from pathlib import Path

from .models import Commit, FileStatus, RefKind, Reference, StatusKind

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0

_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = _FIELD_SEP.join(("%H", "%P", "%an", "%ae", "%at", "%D", "%B")) + _RECORD_SEP

_PORCELAIN_STATUS: dict[str, StatusKind] = {
    " M": StatusKind.MODIFIED,
    "M ": StatusKind.MODIFIED_STAGED,
    "MM": StatusKind.MODIFIED,
    "A ": StatusKind.ADDED_STAGED,
    "AM": StatusKind.ADDED,
    " D": StatusKind.DELETED,
    "D ": StatusKind.DELETED_STAGED,
    "??": StatusKind.UNTRACKED,
    "R ": StatusKind.RENAMED,
    "RM": StatusKind.RENAMED,
    "UU": StatusKind.CONFLICTED,
    "AA": StatusKind.CONFLICTED,
    "DD": StatusKind.CONFLICTED,
}


class GitError(RuntimeError):
    """Raised when a git invocation fails or its output cannot be parsed."""


def _run_git(repo_root: Path, args: list[str], timeout_seconds: float) -> str:
    """Execute a git subcommand and return stdout, raising ``GitError`` on failure."""
    cmd = ["git", "-C", str(repo_root), *args]
    logger.debug("running %s", " ".join(cmd))
    try:
        proc = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.warning("git %s could not run: %s", args[0] if args else "", exc)
        raise GitError(f"failed to run git: {exc}") from exc
    if proc.returncode != 0:
        message = proc.stderr.strip() or f"git {' '.join(args)} exited with {proc.returncode}"
        logger.warning("git %s failed: %s", args[0] if args else "", message)
        raise GitError(message)
    return proc.stdout


def find_repo_root(path: Path, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> Path:
    """Resolve the working-tree root containing ``path``."""
    output = _run_git(path, ["rev-parse", "--show-toplevel"], timeout_seconds)
    top = output.strip()
    if not top:
        raise GitError(f"not a git repository: {path}")
    return Path(top).resolve()


def parse_decorations(decorations: str) -> tuple[Reference, ...]:
    """Parse ``%D`` output produced with ``--decorate=full``."""
    refs: list[Reference] = []
    for raw in decorations.split(","):
        item = raw.strip()
        if not item:
            continue
        if item == "HEAD":
            refs.append(Reference("HEAD", RefKind.HEAD))
            continue
        if item.startswith("HEAD -> "):
            refs.append(Reference("HEAD", RefKind.HEAD))
            item = item[len("HEAD -> "):].strip()
        if item.startswith("tag: "):
            refs.append(Reference(item[len("tag: "):].strip(), RefKind.TAG))
        elif item.startswith("refs/tags/"):
            refs.append(Reference(item, RefKind.TAG))
        elif item.startswith("refs/remotes/"):
            refs.append(Reference(item, RefKind.REMOTE))
        else:
            refs.append(Reference(item, RefKind.BRANCH))
    return tuple(refs)


def parse_log_output(output: str) -> list[Commit]:
    """Parse records produced by ``_LOG_FORMAT``.

    Records with too few fields or an unparseable timestamp are skipped.
    """
    commits: list[Commit] = []
    for record in output.split(_RECORD_SEP):
        record = record.lstrip("\n")
        if not record.strip():
            continue
        parts = record.split(_FIELD_SEP, 6)
        if len(parts) < 7:
            logger.debug("skipping malformed log record %r", record[:80])
            continue
        commit_id, parents, author, email, epoch, decorations, body = parts
        try:
            timestamp = datetime.fromtimestamp(int(epoch.strip()), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            logger.debug("skipping commit %s with bad timestamp %r", commit_id, epoch)
            continue
        commit_id = commit_id.strip()
        if not commit_id:
            continue
        commits.append(
            Commit.create(
                commit_id,
                body.strip("\n"),
                author,
                email,
                timestamp,
                parent_ids=tuple(parents.split()),
                refs=parse_decorations(decorations),
            )
        )
    return commits


def parse_porcelain_status(output: str) -> list[FileStatus]:
    """Parse ``git status --porcelain=v1 -z`` output."""
    entries: list[FileStatus] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue
        code = token[:2]
        if code == "!!":
            continue
        status = _PORCELAIN_STATUS.get(code)
        if status is None:
            status = StatusKind.CONFLICTED if "U" in code else StatusKind.MODIFIED
        entries.append(FileStatus(path=token[3:], status=status))
        # Renames and copies carry the source path as an extra token.
        if "R" in code or "C" in code:
            index += 1
    return entries


class GitRepository:
    """Synchronous git collaborator bound to one working tree."""

    def __init__(self, root: Path, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.root = root
        self.timeout_seconds = timeout_seconds

    @classmethod
    def discover(cls, path: Path, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> GitRepository:
        return cls(find_repo_root(path, timeout_seconds), timeout_seconds)

    def _git(self, *args: str) -> str:
        return _run_git(self.root, list(args), self.timeout_seconds)

    def commits(self, max_count: int | None = None) -> list[Commit]:
        args = ["log", "--all", "--decorate=full", f"--format={_LOG_FORMAT}"]
        if max_count is not None and max_count > 0:
            args.append(f"-n{max_count}")
        try:
            output = self._git(*args)
        except GitError as exc:
            # A freshly initialized repository has no commits yet.
            if "does not have any commits" in str(exc):
                return []
            raise
        return parse_log_output(output)

    def references(self) -> list[Reference]:
        output = self._git(
            "for-each-ref",
            "--format=%(refname)",
            "refs/heads",
            "refs/remotes",
            "refs/tags",
        )
        refs: list[Reference] = []
        for line in output.splitlines():
            name = line.strip()
            if not name:
                continue
            if name.startswith("refs/tags/"):
                kind = RefKind.TAG
            elif name.startswith("refs/remotes/"):
                kind = RefKind.REMOTE
            else:
                kind = RefKind.BRANCH
            refs.append(Reference(name, kind))
        return refs

    def current_branch(self) -> str | None:
        branch = self._git("branch", "--show-current").strip()
        return branch or None

    def file_statuses(self) -> list[FileStatus]:
        output = self._git("status", "--porcelain=v1", "-z", "--untracked-files=normal")
        return parse_porcelain_status(output)

    def commit_diff(self, commit: Commit) -> str:
        """Return the diff of ``commit`` against its first parent."""
        if not commit.parent_ids:
            return (
                f"Commit {commit.short_id} has no parent.\n"
                f"Initial commit: {commit.summary}\n"
            )
        return self._git("diff", "--no-color", commit.parent_ids[0], commit.id)

    def working_tree_diff(self, path: str | None = None) -> str:
        args = ["diff", "--no-color", "HEAD"]
        if path:
            args.extend(["--", path])
        return self._git(*args)

    def stage_file(self, path: str) -> None:
        self._git("add", "--", path)

    def unstage_file(self, path: str) -> None:
        self._git("reset", "-q", "--", path)

    def stage_all(self) -> None:
        self._git("add", "-A")

    def unstage_all(self) -> None:
        self._git("reset", "-q", "HEAD")

    def create_branch(self, name: str, commit_id: str) -> None:
        self._git("branch", name, commit_id)

    def checkout(self, commit_id: str) -> None:
        self._git("checkout", "-q", commit_id)


__all__ = [
    "GitError",
    "GitRepository",
    "find_repo_root",
    "parse_decorations",
    "parse_log_output",
    "parse_porcelain_status",
]
