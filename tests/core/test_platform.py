"""
Unit tests for the platform introspection module.
"""

from unittest.mock import patch

import pytest

from setupgo.core.platform import (
    PlatformInfo,
    detect_platform,
    get_architecture,
    get_operating_system_family,
)


class TestOperatingSystemFamily:
    """Tests for get_operating_system_family()."""

    def test_env_value_wins(self, monkeypatch):
        """Test node-published os_family takes precedence."""
        monkeypatch.setenv("os_family", "Windows")
        with patch("platform.system", return_value="Linux"):
            assert get_operating_system_family() == "Windows"

    @pytest.mark.parametrize(
        "system,expected",
        [("Linux", "Linux"), ("Windows", "Windows"), ("Darwin", "Darwin")],
    )
    def test_detected_family(self, system, expected):
        """Test detection from platform.system()."""
        with patch("platform.system", return_value=system):
            assert get_operating_system_family() == expected

    def test_unknown_family_passed_through(self):
        """Test unknown systems are returned verbatim."""
        with patch("platform.system", return_value="FreeBSD"):
            assert get_operating_system_family() == "FreeBSD"


class TestArchitecture:
    """Tests for get_architecture()."""

    def test_env_value_wins(self, monkeypatch):
        """Test node-published architecture takes precedence."""
        monkeypatch.setenv("architecture", "ARM64")
        with patch("platform.machine", return_value="x86_64"):
            assert get_architecture() == "ARM64"

    @pytest.mark.parametrize("machine", ["x86_64", "AMD64", "x64"])
    def test_x86_64_aliases(self, machine):
        """Test x86_64 aliases are normalized."""
        with patch("platform.machine", return_value=machine):
            assert get_architecture() == "x86_64"

    @pytest.mark.parametrize("machine", ["aarch64", "arm64"])
    def test_arm64_aliases(self, machine):
        """Test ARM64 aliases are normalized."""
        with patch("platform.machine", return_value=machine):
            assert get_architecture() == "ARM64"

    def test_unknown_architecture_passed_through(self):
        """Test unknown machines are returned verbatim."""
        with patch("platform.machine", return_value="riscv64"):
            assert get_architecture() == "riscv64"


class TestDetectPlatform:
    """Tests for detect_platform()."""

    def test_detect_platform(self, monkeypatch):
        """Test detection combines both values."""
        monkeypatch.setenv("os_family", "Linux")
        monkeypatch.setenv("architecture", "x86_64")

        info = detect_platform()

        assert info == PlatformInfo("Linux", "x86_64")
        assert str(info) == "Linux-x86_64"
