"""Interactive state machine and terminal session.

The renderer imports ``runtime.state``, so this package keeps its own imports
lazy to avoid package-import cycles.
"""

from __future__ import annotations


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = ["run_main_loop"]
