"""Tests for configuration system."""

import pytest

from change_checksum.config import (
    Settings,
    get_settings,
    override_settings,
    reset_settings,
)
from change_checksum.core.errors import ConfigurationError


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default configuration values."""
        for name in (
            "CHANGE_CHECKSUM_LOG_LEVEL",
            "CHANGE_CHECKSUM_LOG_JSON",
            "CHANGE_CHECKSUM_STREAM_CHUNK_SIZE",
            "CHANGE_CHECKSUM_STANDARDIZE_LINE_ENDINGS",
        ):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_json is False
        assert s.stream_chunk_size == 65536
        assert s.standardize_line_endings is True

    def test_custom_values(self) -> None:
        """Test custom configuration values."""
        s = Settings(log_level="debug", stream_chunk_size=10, log_json=True)
        assert s.log_level == "DEBUG"
        assert s.stream_chunk_size == 10
        assert s.log_json is True

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables use the CHANGE_CHECKSUM_ prefix."""
        monkeypatch.setenv("CHANGE_CHECKSUM_STREAM_CHUNK_SIZE", "512")
        monkeypatch.setenv("CHANGE_CHECKSUM_STANDARDIZE_LINE_ENDINGS", "false")
        s = Settings(_env_file=None)
        assert s.stream_chunk_size == 512
        assert s.standardize_line_endings is False

    def test_chunk_size_bounds(self) -> None:
        """Chunk size must be positive."""
        assert Settings(stream_chunk_size=1).stream_chunk_size == 1

        with pytest.raises(ValueError):
            Settings(stream_chunk_size=0)

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValueError):
            Settings(log_level="LOUD")


class TestSettingsInjection:
    """Tests for settings dependency injection."""

    def test_get_settings_returns_singleton(self) -> None:
        """Test that get_settings returns same instance."""
        reset_settings()
        s1 = get_settings()
        s2 = get_settings()
        assert s1 is s2

    def test_override_settings(self) -> None:
        """Test settings override for testing."""
        reset_settings()
        original = get_settings()

        custom = Settings(stream_chunk_size=7)
        override_settings(custom)

        current = get_settings()
        assert current.stream_chunk_size == 7
        assert current is custom
        assert current is not original

        reset_settings()

    def test_reset_settings(self) -> None:
        """Test settings reset."""
        reset_settings()
        s1 = get_settings()

        reset_settings()
        s2 = get_settings()

        assert s1 is not s2

    def test_invalid_environment_raises_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Bad values from the environment surface as ConfigurationError."""
        reset_settings()
        monkeypatch.setenv("CHANGE_CHECKSUM_STREAM_CHUNK_SIZE", "0")
        try:
            with pytest.raises(ConfigurationError, match="stream_chunk_size"):
                get_settings()
        finally:
            reset_settings()

    def test_failed_load_is_not_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        reset_settings()
        monkeypatch.setenv("CHANGE_CHECKSUM_LOG_LEVEL", "LOUD")
        with pytest.raises(ConfigurationError):
            get_settings()

        monkeypatch.setenv("CHANGE_CHECKSUM_LOG_LEVEL", "WARNING")
        try:
            assert get_settings().log_level == "WARNING"
        finally:
            reset_settings()
