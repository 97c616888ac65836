"""Test the configuration module functionality."""

from fdenum.config import ENUMERATION_CONFIG, EnumerationConfig


def test_enumeration_config_defaults():
    """Test that the default configuration values are correct."""
    config = EnumerationConfig()

    assert config.default_limit == 1000
    assert config.progress_log_interval == 10_000
    assert config.max_table_rows == 50


def test_effective_limit():
    """None uses the default, non-positive means unlimited."""
    config = EnumerationConfig(default_limit=7)

    assert config.effective_limit(None) == 7
    assert config.effective_limit(3) == 3
    assert config.effective_limit(0) is None
    assert config.effective_limit(-5) is None


def test_global_config_instance():
    """Test that the global ENUMERATION_CONFIG instance works."""
    assert ENUMERATION_CONFIG.default_limit == 1000
    assert ENUMERATION_CONFIG.effective_limit(None) == 1000


def test_custom_config():
    """Test creating a custom configuration."""
    custom = EnumerationConfig(
        default_limit=10, progress_log_interval=0, max_table_rows=5
    )

    assert custom.default_limit == 10
    assert custom.progress_log_interval == 0
    assert custom.max_table_rows == 5
