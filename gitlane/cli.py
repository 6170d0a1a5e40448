"""Command-line front door for gitlane.

Parses CLI options, opens the repository and loads its history, then either
prints the commit graph (``--render``) or starts the interactive session.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .git import GitError, GitRepository
from .graph import format_graph_row
from .logging_config import setup_logging
from .runtime.app import App
from .runtime.config import load_settings, save_setting
from .runtime.state import AppState
from .ui_theme import available_theme_names, normalize_theme_name, resolve_theme

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitlane",
        description="Browse a git repository's commit graph, diffs and working tree in the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Repository path. Defaults to current directory.")
    parser.add_argument(
        "--max-count",
        type=_positive_int,
        default=None,
        help="Maximum number of commits to load (default: config max_commits).",
    )
    parser.add_argument("--theme", choices=available_theme_names(), default=None, help="UI theme name.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--render", action="store_true", help="Print the commit graph and exit.")
    parser.add_argument("--log-file", default=None, help="Append debug logs to this file.")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level.")
    return parser


def render_graph_text(state: AppState) -> str:
    """Render every visible graph row as plain lines for ``--render``."""
    theme = resolve_theme(state.theme_name, no_color=state.no_color or not sys.stdout.isatty())
    out: list[str] = []
    for idx, node in enumerate(state.visible_nodes):
        out.append(format_graph_row(node, idx, -1, theme))
        out.append("\n")
    return "".join(out)


def build_app(args: argparse.Namespace, default_path: Path) -> App:
    settings = load_settings()
    path = Path(args.path) if args.path else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    try:
        repository = GitRepository.discover(path)
    except GitError as exc:
        raise SystemExit(f"Not a git repository: {path} ({exc})") from exc

    state = AppState(
        repo_name=repository.root.name,
        theme_name=normalize_theme_name(args.theme or settings.theme),
        no_color=args.no_color,
        show_sidebar=settings.show_sidebar,
        page_size=settings.page_size,
        page_size_limit=settings.page_size,
    )
    app = App(
        state,
        repository,
        max_commits=args.max_count or settings.max_commits,
        persist_setting=save_setting,
    )
    app.refresh()
    return app


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch gitlane.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, log_file=args.log_file)
    app = build_app(args, default_path or Path.cwd())
    logger.info("loaded %d commits from %s", len(app.state.commits), app.repository.root)

    if args.render:
        sys.stdout.write(render_graph_text(app.state))
        return

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("gitlane needs an interactive terminal (use --render to print the graph).")

    from .runtime.loop import run_main_loop
    from .runtime.terminal import TerminalController

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    run_main_loop(app, terminal, stdin_fd)
    logger.info("session ended")


if __name__ == "__main__":
    main()
