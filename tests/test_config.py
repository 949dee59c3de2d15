"""Tests for configuration module."""

import os


def test_settings_import():
    """Test that settings can be imported."""
    from tallyboard.config import settings

    assert settings is not None


def test_default_settings():
    """Test default settings values."""
    from tallyboard.config import Settings

    settings = Settings(_env_file=None)

    assert settings.timezone == "America/Vancouver"
    assert settings.midnight_check_interval == 60
    assert settings.clear_confirmation_phrase == "confirm"
    assert settings.product_name == "ReCARE_Tally"
    assert "DROP-OFFS" in settings.builtin_tally_types
    assert len(settings.builtin_tally_types) == 5


def test_test_environment_settings():
    """Test that the test run is isolated from the real database."""
    from tallyboard.config import settings

    assert settings.database_url == "sqlite:///:memory:"
    assert settings.enable_midnight_watcher is False


def test_env_override():
    """Test that environment variables override defaults."""
    from tallyboard.config import Settings

    original_value = os.environ.get("TIMEZONE")
    os.environ["TIMEZONE"] = "America/Toronto"
    try:
        assert Settings(_env_file=None).timezone == "America/Toronto"
    finally:
        if original_value is not None:
            os.environ["TIMEZONE"] = original_value
        else:
            del os.environ["TIMEZONE"]
