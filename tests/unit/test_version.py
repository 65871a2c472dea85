"""
Tests for Semantic Versions.

This test suite covers:
1. Parsing valid and invalid version strings
2. Canonical form
3. Precedence ordering, including pre-releases
4. Version directory name splitting
"""

import pytest

from crext.extension.version import (
    InvalidVersion,
    SemanticVersion,
    compare_versions,
    parse_version,
    split_version_string,
)


class TestParseVersion:
    """Test semantic version parsing."""

    def test_parse_release(self):
        """Should parse major.minor.patch."""
        version = parse_version("1.2.3")
        assert (version.major, version.minor, version.patch) == (1, 2, 3)
        assert version.prerelease == ()

    def test_parse_prerelease_and_build(self):
        """Should split pre-release and build identifiers."""
        version = parse_version("1.0.0-beta.2+exp.sha.5114f85")
        assert version.prerelease == ("beta", "2")
        assert version.build == ("exp", "sha", "5114f85")

    def test_leading_v_accepted(self):
        """Should accept a leading v or = like npm's semver.valid."""
        assert parse_version("v1.2.3").canonical == "1.2.3"
        assert parse_version("=1.2.3").canonical == "1.2.3"

    @pytest.mark.parametrize(
        "text",
        ["1.0", "1", "not-a-version", "01.0.0", "1.0.0-", "", "1.0.0.0", "1.\u0663.0"],
    )
    def test_invalid_versions(self, text):
        """Should reject strings that are not semantic versions."""
        with pytest.raises(InvalidVersion):
            parse_version(text)

    def test_canonical_drops_build(self):
        """Canonical form should keep pre-release but drop build metadata."""
        assert parse_version("2.0.0-rc.1+build.7").canonical == "2.0.0-rc.1"
        assert str(parse_version("2.0.0+build")) == "2.0.0"


class TestVersionOrdering:
    """Test semver precedence."""

    def test_core_ordering(self):
        """Should order by major, minor, then patch numerically."""
        assert parse_version("1.10.0") > parse_version("1.9.9")
        assert parse_version("2.0.0") > parse_version("1.99.99")

    def test_release_outranks_prerelease(self):
        """A release should have higher precedence than its pre-releases."""
        assert parse_version("1.0.0") > parse_version("1.0.0-rc.1")

    def test_prerelease_chain(self):
        """Should follow the pre-release ordering from the semver spec."""
        chain = [
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-alpha.beta",
            "1.0.0-beta",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
        ]
        versions = [parse_version(text) for text in chain]
        assert sorted(reversed(versions)) == versions

    def test_build_ignored_for_equality(self):
        """Build metadata should not affect precedence."""
        assert parse_version("1.0.0+a") == parse_version("1.0.0+b")
        assert compare_versions(parse_version("1.0.0+a"), parse_version("1.0.0")) == 0


class TestSplitVersionString:
    """Test version directory name splitting."""

    def test_split_revision(self):
        """Should split the version from the revision at the first underscore."""
        version, revision = split_version_string("1.2.0_r4")
        assert version == SemanticVersion(1, 2, 0)
        assert revision == "r4"

    def test_revision_with_underscores(self):
        """Revision should keep any further underscores."""
        _, revision = split_version_string("1.2.0_build_42_x")
        assert revision == "build_42_x"

    def test_missing_revision(self):
        """A bare version should give an empty revision."""
        version, revision = split_version_string("3.0.0")
        assert version.canonical == "3.0.0"
        assert revision == ""

    def test_invalid_head(self):
        """Should reject names whose first segment is not a version."""
        with pytest.raises(InvalidVersion):
            split_version_string("latest_r1")
