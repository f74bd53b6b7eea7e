"""Version extraction, validation and bumping.

The commit step reads the release version straight from the manifest text:
the first line shaped like ``version = "<value>"`` wins and ``<value>`` is
taken verbatim. Bumping and validation of user-supplied versions go through
semver.
"""

from __future__ import annotations

import re

import semver

VERSION_LINE = re.compile(r'^version = "(.*)"')
BUMP_PARTS = ("major", "minor", "patch")


class VersionNotFoundError(ValueError):
    """Raised when no manifest line declares a version."""

    def __init__(self, source: str) -> None:
        super().__init__(
            f'No line matching \'version = "<value>"\' found in {source}. '
            "Fix the manifest's version declaration and re-run."
        )


class InvalidVersionError(ValueError):
    """Raised when a requested version or bump cannot be applied."""


def extract_version(text: str, source: str = "manifest") -> str:
    """Return the value of the first ``version = "..."`` line in text.

    The line must start with ``version = "``. The capture is greedy up to the
    last double quote on the line and is not validated or trimmed, so
    pre-release and build suffixes survive unchanged.

    Args:
        text: Manifest contents.
        source: Name used in the error message (usually the manifest path).

    Raises:
        VersionNotFoundError: If no line matches.
    """
    for line in text.splitlines():
        match = VERSION_LINE.match(line)
        if match:
            return match.group(1)
    raise VersionNotFoundError(source)


def release_message(version: str, prefix: str = "release: Version ") -> str:
    """Build the release commit message, e.g. "release: Version 1.2.3"."""
    return f"{prefix}{version}"


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Handles incomplete versions by padding with zeros:
    - "1" → "1.0.0"
    - "1.2" → "1.2.0"
    - "1.2.3-rc.1" → "1.2.3-rc.1"

    Raises:
        ValueError: If the string is not a valid semantic version.
    """
    core, sep, rest = version_str.partition("-")
    if not sep:
        core, sep, rest = version_str.partition("+")
    parts = core.split(".")
    while len(parts) < 3:
        parts.append("0")
    return semver.Version.parse(".".join(parts) + sep + rest)


def bump_version(version_str: str, part: str) -> str:
    """Increment one component of a version and return it as a string.

    Examples:
        bump_version("1.2.3", "patch") → "1.2.4"
        bump_version("1.2.3", "minor") → "1.3.0"
        bump_version("1.2", "major") → "2.0.0"
    """
    if part not in BUMP_PARTS:
        raise ValueError(f"Unknown version part {part!r}, expected one of {BUMP_PARTS}")
    version = parse_version(version_str)
    return str(getattr(version, f"bump_{part}")())
