"""Shell and git utilities.

Every release step is an external program: an editor, make targets, the
dependency tool, git. These helpers run them and report progress.
"""

from __future__ import annotations

import subprocess
import sys
from typing import NoReturn


def git(*args: str, check: bool = True) -> str:
    """Query git and return its stripped stdout.

    Only used for read-only lookups such as the short hash of the release
    commit; staging and committing go through run() so git's own messages
    reach the operator.
    """
    result = subprocess.run(["git", *args], capture_output=True, text=True, check=check)
    return result.stdout.strip()


def run(*args: str, check: bool = True) -> subprocess.CompletedProcess[bytes]:
    """Run a release step command on the operator's terminal.

    Nothing is captured and stdin is inherited, so the manifest editor is
    interactive and a failing tool prints its own error.
    """
    return subprocess.run(args, check=check)


def step(msg: str) -> None:
    """Print the header that opens each release step."""
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def warn(msg: str) -> None:
    """Print a warning to stderr without stopping the pipeline."""
    print(f"WARNING: {msg}", file=sys.stderr)


def fatal(msg: str, code: int = 1) -> NoReturn:
    """Print an error message and exit.

    Args:
        msg: Message printed to stderr.
        code: Process exit status. Anything below 1 (e.g. a signal-killed
              child's negative returncode) is reported as 1.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(code if code > 0 else 1)
