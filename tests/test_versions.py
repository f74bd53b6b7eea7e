"""Tests for release_prep.versions."""

from __future__ import annotations

import pytest

from release_prep.versions import (
    VersionNotFoundError,
    bump_version,
    extract_version,
    parse_version,
    release_message,
)


class TestExtractVersion:
    def test_version_after_other_fields(self) -> None:
        text = 'name = "rash"\nversion = "1.2.3"\nedition = "2021"\n'
        assert extract_version(text) == "1.2.3"

    def test_first_match_wins(self) -> None:
        text = (
            '[package]\nversion = "0.9.0"\n\n'
            '[workspace.package]\nversion = "2.0.0"\n'
        )
        assert extract_version(text) == "0.9.0"

    def test_keeps_prerelease_and_build_suffix(self) -> None:
        assert extract_version('version = "1.0.0-rc.1+build.5"') == "1.0.0-rc.1+build.5"

    def test_value_taken_verbatim(self) -> None:
        assert extract_version('version = " 1.2.3 "') == " 1.2.3 "

    def test_indented_line_does_not_match(self) -> None:
        text = '  version = "9.9.9"\nversion = "1.0.0"\n'
        assert extract_version(text) == "1.0.0"

    def test_inline_table_version_does_not_match(self) -> None:
        text = 'rash_core = { version = "9.9.9" }\nversion = "1.0.0"\n'
        assert extract_version(text) == "1.0.0"

    def test_different_spacing_does_not_match(self) -> None:
        with pytest.raises(VersionNotFoundError):
            extract_version('version="1.0.0"\nversion  =  "1.0.0"\n')

    def test_no_version_line(self) -> None:
        with pytest.raises(VersionNotFoundError) as excinfo:
            extract_version('name = "rash"\n', source="Cargo.toml")
        assert "Cargo.toml" in str(excinfo.value)

    def test_empty_text(self) -> None:
        with pytest.raises(VersionNotFoundError):
            extract_version("")


class TestReleaseMessage:
    def test_default_prefix(self) -> None:
        assert release_message("1.2.3") == "release: Version 1.2.3"

    def test_suffix_kept(self) -> None:
        assert release_message("2.0.0-beta.1") == "release: Version 2.0.0-beta.1"

    def test_custom_prefix(self) -> None:
        assert release_message("1.0.0", prefix="chore: release v") == "chore: release v1.0.0"


class TestParseVersion:
    def test_full_semver(self) -> None:
        v = parse_version("1.2.3")
        assert (v.major, v.minor, v.patch) == (1, 2, 3)

    def test_two_part_version(self) -> None:
        assert str(parse_version("1.2")) == "1.2.0"

    def test_single_part_version(self) -> None:
        assert str(parse_version("5")) == "5.0.0"

    def test_prerelease(self) -> None:
        v = parse_version("1.2.3-rc.1")
        assert v.prerelease == "rc.1"

    def test_padded_prerelease(self) -> None:
        assert str(parse_version("1.2-alpha")) == "1.2.0-alpha"

    def test_build_metadata(self) -> None:
        assert parse_version("1.2.3+abc").build == "abc"

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_version("not-a-version")


class TestBumpVersion:
    def test_bump_patch(self) -> None:
        assert bump_version("1.2.3", "patch") == "1.2.4"

    def test_bump_minor(self) -> None:
        assert bump_version("1.2.3", "minor") == "1.3.0"

    def test_bump_major(self) -> None:
        assert bump_version("1.2.3", "major") == "2.0.0"

    def test_bump_incomplete(self) -> None:
        assert bump_version("1.2", "patch") == "1.2.1"

    def test_unknown_part(self) -> None:
        with pytest.raises(ValueError):
            bump_version("1.2.3", "build")
