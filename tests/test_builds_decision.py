"""Tests for builds/decision.py module."""

import pytest

from demo_build.builds.decision import artifact_exists, decide
from demo_build.types import DecisionAction, RebuildReason


class TestArtifactExists:
    """Tests for artifact_exists function."""

    def test_missing_public_dir(self, paths):
        assert artifact_exists(paths) is False

    def test_public_dir_without_marker(self, paths):
        """A public directory without index.html is not a completed build."""
        paths.public_dir.mkdir(parents=True)
        (paths.public_dir / "stale.js").write_text("x")
        assert artifact_exists(paths) is False

    def test_marker_present(self, paths):
        paths.public_dir.mkdir(parents=True)
        paths.marker_path.write_text("<html></html>")
        assert artifact_exists(paths) is True

    def test_marker_is_directory(self, paths):
        paths.marker_path.mkdir(parents=True)
        assert artifact_exists(paths) is False


class TestDecide:
    """Tests for decide function."""

    def test_skip_when_cached_and_present(self):
        decision = decide("abc123", "abc123", True)
        assert decision.action is DecisionAction.SKIP
        assert decision.reason is None
        assert decision.should_rebuild is False

    def test_rebuild_when_cache_absent(self):
        decision = decide("abc123", None, False)
        assert decision.action is DecisionAction.REBUILD
        assert decision.reason is RebuildReason.FINGERPRINT_CHANGED

    def test_rebuild_when_changed(self):
        decision = decide("def456", "abc123", True)
        assert decision.should_rebuild is True
        assert decision.reason is RebuildReason.FINGERPRINT_CHANGED

    def test_rebuild_when_artifact_missing(self):
        decision = decide("abc123", "abc123", False)
        assert decision.should_rebuild is True
        assert decision.reason is RebuildReason.ARTIFACT_MISSING

    def test_changed_takes_precedence_over_missing(self):
        decision = decide("def456", "abc123", False)
        assert decision.reason is RebuildReason.FINGERPRINT_CHANGED

    @pytest.mark.parametrize(
        ("cached", "present"),
        [("abc123", True), ("abc123", False), (None, False), ("zzz", True)],
    )
    def test_force_always_rebuilds(self, cached, present):
        decision = decide("abc123", cached, present, force=True)
        assert decision.should_rebuild is True
        assert decision.reason is RebuildReason.FORCED

    def test_decision_records_inputs(self):
        decision = decide("abc123", "old", True)
        assert decision.current == "abc123"
        assert decision.cached == "old"
        assert decision.artifact_exists is True
