"""Release pipeline: edit → propagate → lock → changelog → commit.

This module orchestrates release preparation:
1. Let a human edit the manifest version (or apply a chosen version)
2. Propagate the new version to the rest of the project
3. Refresh the lock file for the project's own packages only
4. Regenerate the changelog
5. Stage everything and create one release commit

Steps run strictly in order and the first failure stops the run. Nothing is
rolled back: whatever a failed step left behind stays in the working tree
for the operator to inspect, and the whole pipeline is re-run from the top.
Tagging and publishing happen downstream once the commit is merged.
"""

from __future__ import annotations

from pathlib import Path

from tomlkit.exceptions import ParseError

from .config import resolve_editor
from .models import PipelineStep, ReleaseConfig
from .shell import fatal, git, run, step, warn
from .toml import get_manifest_version, load_toml, set_manifest_version
from .versions import (
    InvalidVersionError,
    bump_version,
    extract_version,
    parse_version,
    release_message,
)

RELEASE_NOTICE = "After merging the PR, tag and release are automatically done."
STAGE_ARGV = ["git", "add", "--all"]


def editor_step(config: ReleaseConfig) -> PipelineStep:
    return PipelineStep(
        name="Manifest edit", argv=[*resolve_editor(config), config.manifest]
    )


def propagate_step(config: ReleaseConfig) -> PipelineStep:
    return PipelineStep(name="Version propagation", argv=list(config.update_version))


def lock_step(config: ReleaseConfig) -> PipelineStep:
    return PipelineStep(name="Lock refresh", argv=config.lock_args())


def changelog_step(config: ReleaseConfig) -> PipelineStep:
    return PipelineStep(
        name="Changelog regeneration", argv=list(config.update_changelog)
    )


def commit_step(message: str) -> PipelineStep:
    return PipelineStep(name="Commit", argv=["git", "commit", "-m", message])


def run_step(pipeline_step: PipelineStep) -> None:
    """Run one external command, exiting with its status if it fails.

    The command's own output is the diagnostic; this only adds a one-line
    summary naming the step.
    """
    try:
        result = run(*pipeline_step.argv, check=False)
    except FileNotFoundError:
        fatal(
            f"{pipeline_step.name} failed ({pipeline_step.argv[0]}: command not found)",
            code=127,
        )
    except PermissionError:
        fatal(
            f"{pipeline_step.name} failed ({pipeline_step.argv[0]}: permission denied)",
            code=126,
        )
    if result.returncode != 0:
        fatal(
            f"{pipeline_step.name} failed "
            f"({pipeline_step} exited with status {result.returncode})",
            code=result.returncode,
        )


def read_release_version(config: ReleaseConfig) -> str:
    """Return the version the release commit will carry.

    Raises:
        VersionNotFoundError: If the manifest has no version line.
    """
    manifest = Path(config.manifest)
    return extract_version(manifest.read_text(), source=str(manifest))


def check_version_source(config: ReleaseConfig, version: str) -> None:
    """Warn when the first version line is not the configured version key.

    The commit always uses the first matching line; a nested table declared
    above the real version would otherwise be picked silently.
    """
    try:
        doc = load_toml(Path(config.manifest))
    except ParseError as exc:
        warn(f"{config.manifest} is not valid TOML ({exc}); skipping version check")
        return
    declared = get_manifest_version(doc, config.version_key)
    if declared is not None and declared != version:
        warn(
            f"{config.manifest}: first version line says {version!r} but "
            f"{config.version_key} is {declared!r}; committing {version!r}"
        )


def edit_manifest(config: ReleaseConfig) -> None:
    """Open the manifest in an editor so a human can set the new version.

    Succeeds when the editor exits 0, whether or not anything changed.
    """
    step(f"Editing {config.manifest}")
    run_step(editor_step(config))


def apply_version(config: ReleaseConfig, version: str) -> None:
    """Write a chosen version into the manifest without an editor."""
    step(f"Setting {config.manifest} version")
    set_manifest_version(Path(config.manifest), version, config.version_key)
    print(f"  {config.version_key} = {version}")


def propagate_version(config: ReleaseConfig) -> None:
    """Make every project file consistent with the manifest version."""
    step("Propagating version")
    run_step(propagate_step(config))


def refresh_lock(config: ReleaseConfig) -> None:
    """Regenerate the lock file for the project's own packages only.

    Third-party dependencies are deliberately left at their locked versions.
    """
    step(f"Refreshing lock file ({', '.join(config.lock_packages)})")
    run_step(lock_step(config))


def regenerate_changelog(config: ReleaseConfig) -> None:
    """Rewrite the changelog from repository history."""
    step("Regenerating changelog")
    run_step(changelog_step(config))


def commit_release(config: ReleaseConfig) -> str:
    """Stage all changes and create the release commit.

    Staging happens before the version is read, so a manifest without a
    version line leaves the changes staged but uncommitted.

    Returns:
        The commit message used.

    Raises:
        VersionNotFoundError: If the manifest has no version line. No commit
            is attempted in that case.
    """
    step("Committing release")
    run_step(PipelineStep(name="Staging", argv=STAGE_ARGV))

    version = read_release_version(config)
    check_version_source(config, version)
    message = release_message(version, config.commit_prefix)

    run_step(commit_step(message))
    print(f"  {git('rev-parse', '--short', 'HEAD')} {message}")
    return message


def bump_base_version(config: ReleaseConfig) -> str:
    """Return the version at ``version_key``, the base for a bump.

    Falls back to the first version line when the key is absent.

    Raises:
        tomlkit.exceptions.ParseError: If the manifest is not valid TOML.
        VersionNotFoundError: If the key is absent and no line matches either.
    """
    declared = get_manifest_version(load_toml(Path(config.manifest)), config.version_key)
    if declared is not None:
        return declared
    return read_release_version(config)


def resolve_version(
    config: ReleaseConfig, version: str | None, bump: str | None
) -> str | None:
    """Work out the version to apply, or None to ask a human via the editor.

    Raises:
        InvalidVersionError: If both version and bump are given, the version
            is not semver, or the current version cannot be bumped.
    """
    if version is not None and bump is not None:
        raise InvalidVersionError("Pass either a version or a part to bump, not both")
    if version is None and bump is None:
        return None
    base = bump_base_version(config) if bump is not None else version
    try:
        if bump is not None:
            return bump_version(base, bump)
        return str(parse_version(base))
    except ValueError as exc:
        raise InvalidVersionError(f"{base!r}: {exc}") from exc


def plan(config: ReleaseConfig) -> list[PipelineStep]:
    """List the commands an interactive run would execute, in order."""
    return [
        editor_step(config),
        propagate_step(config),
        lock_step(config),
        changelog_step(config),
        PipelineStep(name="Staging", argv=STAGE_ARGV),
        commit_step(release_message("<version>", config.commit_prefix)),
    ]


def run_release(
    config: ReleaseConfig, *, version: str | None = None, bump: str | None = None
) -> str:
    """Execute the full release preparation pipeline.

    Args:
        config: Project settings.
        version: Version to set instead of opening the editor.
        bump: "major", "minor" or "patch" to bump the current version
              instead of opening the editor.

    Returns:
        The release commit message.
    """
    new_version = resolve_version(config, version, bump)

    if new_version is None:
        edit_manifest(config)
    else:
        apply_version(config, new_version)
    propagate_version(config)
    refresh_lock(config)
    regenerate_changelog(config)
    message = commit_release(config)

    print(f"\n{'=' * 60}\n{RELEASE_NOTICE}\n{'=' * 60}")
    return message
