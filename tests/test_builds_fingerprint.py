"""Tests for builds/fingerprint.py module.

Git is mocked; cache files are real files under tmp_path.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from demo_build.builds.fingerprint import (
    cached_fingerprint,
    current_fingerprint,
    ensure_submodule,
    save_fingerprint,
    short_fingerprint,
)
from demo_build.errors import (
    REMEDIATION,
    CacheWriteError,
    FingerprintQueryError,
    SubmoduleUnavailableError,
)

COMMIT = "0123456789abcdef0123456789abcdef01234567"


class TestShortFingerprint:
    """Tests for short_fingerprint function."""

    def test_truncates(self):
        assert short_fingerprint(COMMIT) == "01234567"

    def test_none(self):
        assert short_fingerprint(None) == "(none)"

    def test_short_value_unchanged(self):
        assert short_fingerprint("abc123") == "abc123"


class TestEnsureSubmodule:
    """Tests for ensure_submodule function."""

    def test_missing_submodule(self, paths):
        """Should fail when the submodule directory is absent."""
        with pytest.raises(SubmoduleUnavailableError) as exc_info:
            ensure_submodule(paths)
        assert exc_info.value.code == "submodule_unavailable"
        assert exc_info.value.remediation == REMEDIATION

    def test_uninitialized_submodule(self, paths):
        """An empty submodule directory (not initialized) should fail."""
        paths.submodule_dir.mkdir()
        with pytest.raises(SubmoduleUnavailableError):
            ensure_submodule(paths)

    def test_initialized_submodule(self, submodule):
        """Should pass when the init marker directory exists."""
        ensure_submodule(submodule)


class TestCurrentFingerprint:
    """Tests for current_fingerprint function."""

    def test_returns_trimmed_commit(self, submodule):
        """Should strip whitespace from git output."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(stdout=f"  {COMMIT}\n", returncode=0)
            assert current_fingerprint(submodule) == COMMIT

            args, kwargs = mock_run.call_args
            assert args[0] == ["git", "rev-parse", "HEAD"]
            assert kwargs["cwd"] == submodule.submodule_dir
            assert kwargs["check"] is True

    def test_missing_submodule_dir(self, paths):
        """Should not run git when the working copy is absent."""
        with patch("subprocess.run") as mock_run:
            with pytest.raises(SubmoduleUnavailableError):
                current_fingerprint(paths)
            mock_run.assert_not_called()

    def test_git_failure(self, submodule):
        """Non-zero git exit should raise FingerprintQueryError."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = subprocess.CalledProcessError(
                128, ["git"], stderr="fatal: not a git repository\n"
            )
            with pytest.raises(FingerprintQueryError) as exc_info:
                current_fingerprint(submodule)

        assert exc_info.value.code == "fingerprint_query_failed"
        assert "not a git repository" in str(exc_info.value)
        assert exc_info.value.remediation == REMEDIATION

    def test_git_missing(self, submodule):
        """A missing git executable should raise FingerprintQueryError."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("git")
            with pytest.raises(FingerprintQueryError):
                current_fingerprint(submodule)

    def test_empty_output(self, submodule):
        """Empty output should raise FingerprintQueryError."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(stdout="\n", returncode=0)
            with pytest.raises(FingerprintQueryError):
                current_fingerprint(submodule)


class TestCachedFingerprint:
    """Tests for cached_fingerprint function."""

    def test_absent(self, paths):
        """Missing cache file is a normal first run."""
        assert cached_fingerprint(paths) is None

    def test_reads_trimmed(self, paths):
        paths.cache_file.parent.mkdir(parents=True)
        paths.cache_file.write_text("abc123\n")
        assert cached_fingerprint(paths) == "abc123"

    def test_empty_file(self, paths):
        paths.cache_file.parent.mkdir(parents=True)
        paths.cache_file.write_text("")
        assert cached_fingerprint(paths) is None

    def test_unreadable(self, paths):
        """A cache path that cannot be read should count as absent."""
        paths.cache_file.mkdir(parents=True)
        assert cached_fingerprint(paths) is None

    def test_undecodable(self, paths):
        paths.cache_file.parent.mkdir(parents=True)
        paths.cache_file.write_bytes(b"\xff\xfe\x00garbage")
        assert cached_fingerprint(paths) is None


class TestSaveFingerprint:
    """Tests for save_fingerprint function."""

    def test_creates_directory(self, paths):
        """Should create the cache directory on first write."""
        save_fingerprint(paths, "abc123")
        assert paths.cache_file.read_text() == "abc123"

    def test_overwrites(self, paths):
        save_fingerprint(paths, "abc123")
        save_fingerprint(paths, "def456")
        assert paths.cache_file.read_text() == "def456"
        assert cached_fingerprint(paths) == "def456"

    def test_no_temp_files_left(self, paths):
        save_fingerprint(paths, "abc123")
        assert [p.name for p in paths.cache_file.parent.iterdir()] == ["commit-hash"]

    def test_write_failure(self, paths):
        """Unwritable cache location should raise CacheWriteError."""
        # A file where the cache directory should be
        paths.cache_file.parent.parent.mkdir(parents=True)
        paths.cache_file.parent.write_text("not a directory")

        with pytest.raises(CacheWriteError) as exc_info:
            save_fingerprint(paths, "abc123")
        assert exc_info.value.fatal is False
        assert exc_info.value.code == "cache_write_failed"
