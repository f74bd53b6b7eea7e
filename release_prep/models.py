"""Data models for release-prep.

These Pydantic models describe the configurable commands the release
pipeline runs and the ordered steps it builds from them.
"""

from __future__ import annotations

import shlex

from pydantic import BaseModel, ConfigDict, Field


class ReleaseConfig(BaseModel):
    """Settings for one project's release preparation.

    The defaults reproduce the Cargo/make workflow the tool was written for,
    so a repository without a config file needs no setup.

    Attributes:
        manifest: Path of the manifest holding the version, relative to the
                  repository root.
        version_key: Dotted TOML key of the authoritative version, used when
                     the version is set non-interactively.
        editor: Editor command line. None means $VISUAL, then $EDITOR, then vim.
        update_version: Command that propagates the manifest version to the
                        rest of the project.
        lock_command: Dependency tool command that refreshes the lock file.
        lock_packages: Internal packages the lock refresh is restricted to.
        update_changelog: Command that rewrites the changelog.
        commit_prefix: Text placed before the version in the commit message.
    """

    model_config = ConfigDict(extra="forbid")

    manifest: str = "Cargo.toml"
    version_key: str = "package.version"
    editor: str | None = None
    update_version: list[str] = Field(
        default_factory=lambda: ["make", "update-version"], min_length=1
    )
    lock_command: list[str] = Field(
        default_factory=lambda: ["cargo", "update"], min_length=1
    )
    lock_packages: list[str] = Field(
        default_factory=lambda: ["rash_core", "rash_derive"], min_length=1
    )
    update_changelog: list[str] = Field(
        default_factory=lambda: ["make", "update-changelog"], min_length=1
    )
    commit_prefix: str = "release: Version "

    def lock_args(self) -> list[str]:
        """Full lock refresh command, one ``-p`` flag per internal package."""
        args = list(self.lock_command)
        for package in self.lock_packages:
            args.extend(["-p", package])
        return args


class PipelineStep(BaseModel):
    """One external command in the release pipeline.

    Attributes:
        name: Human-readable step name used in headers and errors.
        argv: Command and arguments, run without a shell.
    """

    name: str
    argv: list[str]

    def __str__(self) -> str:
        return shlex.join(self.argv)
