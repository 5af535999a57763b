"""
Tests for timestamp, path and formatting helpers.
"""

import errno
import os
import sys
from datetime import datetime
from types import SimpleNamespace

import pytest

from recent_mover.utils import (
    best_timestamp,
    format_size,
    format_time,
    is_cross_device_error,
    normalize_path,
)


class TestBestTimestamp:
    """Tests for best_timestamp function."""

    def test_prefers_birthtime(self):
        """st_birthtime wins when the platform provides it."""
        stat_result = SimpleNamespace(st_birthtime=10.0, st_ctime=20.0, st_mtime=30.0)
        assert best_timestamp(stat_result) == 10.0

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX fallback")
    def test_falls_back_to_mtime(self):
        """Without birth time, POSIX platforms use the modification time."""
        stat_result = SimpleNamespace(st_ctime=20.0, st_mtime=30.0)
        assert best_timestamp(stat_result) == 30.0

    @pytest.mark.skipif(sys.platform != "win32", reason="Windows-only test")
    def test_windows_uses_ctime(self):
        """On Windows st_ctime is the creation time."""
        stat_result = SimpleNamespace(st_ctime=20.0, st_mtime=30.0)
        assert best_timestamp(stat_result) == 20.0

    def test_real_file(self, tmp_path):
        """Works on a real stat result."""
        path = tmp_path / "a.txt"
        path.write_text("x")
        assert isinstance(best_timestamp(os.stat(path)), float)


class TestNormalizePath:
    """Tests for normalize_path function."""

    def test_relative_path_becomes_absolute(self):
        """Relative paths are converted to absolute."""
        assert normalize_path("relative/path").is_absolute()

    def test_home_expanded(self, tmp_path, monkeypatch):
        """~ expands to the home directory."""
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("USERPROFILE", str(tmp_path))
        assert normalize_path("~/Downloads") == (tmp_path / "Downloads").resolve()

    def test_missing_path_allowed(self, tmp_path):
        """Paths that do not exist are still normalized."""
        result = normalize_path(tmp_path / "missing" / ".." / "other")
        assert result == (tmp_path / "other").resolve()


class TestIsCrossDeviceError:
    """Tests for is_cross_device_error function."""

    def test_exdev(self):
        """EXDEV is a cross-device error."""
        assert is_cross_device_error(OSError(errno.EXDEV, "Invalid cross-device link"))

    def test_other_errno(self):
        """Other errors are not."""
        assert not is_cross_device_error(OSError(errno.EACCES, "Permission denied"))

    def test_windows_not_same_device(self):
        """ERROR_NOT_SAME_DEVICE (winerror 17) is a cross-device error."""
        error = OSError(errno.EINVAL, "The system cannot move the file to a different disk drive")
        error.winerror = 17
        assert is_cross_device_error(error)


class TestFormatSize:
    """Tests for format_size function."""

    @pytest.mark.parametrize("size, expected", [
        (0, "0B"),
        (1023, "1023B"),
        (1024, "1.0KB"),
        (1536, "1.5KB"),
        (5 * 1024 * 1024, "5.0MB"),
        (3 * 1024 ** 4, "3.0TB"),
        (2048 * 1024 ** 4, "2048.0TB"),
    ])
    def test_sizes(self, size, expected):
        assert format_size(size) == expected


class TestFormatTime:
    """Tests for format_time function."""

    def test_same_day_shows_time_only(self):
        """Timestamps from the reference day render as HH:MM."""
        moment = datetime(2024, 3, 5, 14, 7).timestamp()
        assert format_time(moment, moment + 60) == "14:07"

    def test_other_day_shows_date(self):
        """Timestamps from another day include the date."""
        moment = datetime(2024, 3, 5, 23, 50).timestamp()
        later = datetime(2024, 3, 6, 0, 5).timestamp()
        assert format_time(moment, later) == "2024-03-05 23:50"
