"""Loading release-prep configuration.

Configuration lives in an optional ``release-prep.toml`` at the repository
root. Every key is optional; see ReleaseConfig for the defaults.
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path

from .models import ReleaseConfig
from .toml import load_toml

CONFIG_FILENAME = "release-prep.toml"
DEFAULT_EDITOR = "vim"


class InvalidEditorError(ValueError):
    """Raised when the editor command line cannot be split into arguments."""


def load_config(path: Path | None = None) -> ReleaseConfig:
    """Load configuration from path, or from release-prep.toml if present.

    An explicitly given path must exist. Without one, a missing
    release-prep.toml in the working directory means all defaults.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        tomlkit.exceptions.ParseError: If the file is not valid TOML.
        pydantic.ValidationError: If a value has the wrong type or a key is unknown.
    """
    if path is None:
        path = Path.cwd() / CONFIG_FILENAME
        if not path.exists():
            return ReleaseConfig()
    return ReleaseConfig.model_validate(load_toml(path).unwrap())


def resolve_editor(config: ReleaseConfig) -> list[str]:
    """Return the editor command line as argv.

    Precedence: config ``editor``, $VISUAL, $EDITOR, then vim. The value is
    split shell-style so "code --wait" becomes two arguments.

    Raises:
        InvalidEditorError: If the command has unbalanced quotes.
    """
    editor = (
        config.editor
        or os.environ.get("VISUAL")
        or os.environ.get("EDITOR")
        or DEFAULT_EDITOR
    )
    try:
        argv = shlex.split(editor)
    except ValueError as exc:
        raise InvalidEditorError(f"Invalid editor command {editor!r}: {exc}") from exc
    return argv or [DEFAULT_EDITOR]
