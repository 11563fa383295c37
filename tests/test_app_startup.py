"""Tests for Flask application startup with configuration."""

import os
from unittest.mock import patch

import pytest

from payoff_planner import create_app
from payoff_planner.config import reset_global_settings


class TestAppStartup:
    """Test cases for Flask application startup."""

    def test_app_creation_with_valid_config(self):
        """Test that app creates successfully with valid configuration."""
        reset_global_settings()

        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            app = create_app()

            assert app is not None
            assert app.config["SECRET_KEY"] == "valid-secret-key-123"
            assert app.config["MAX_SIMULATION_MONTHS"] == 1200
            assert "plans" in app.blueprints
            assert "health" in app.blueprints

    def test_app_creation_fails_with_placeholder_secret_key(self):
        """Test that app creation fails with placeholder SECRET_KEY."""
        reset_global_settings()

        with patch.dict(
            os.environ,
            {"SECRET_KEY": "your-secret-key-here-change-in-production"},
            clear=True,
        ):
            with pytest.raises(Exception) as exc_info:
                create_app()

            assert "SECRET_KEY must be set to a secure value" in str(exc_info.value)

    def test_app_uses_custom_environment_variables(self):
        """Test that app uses custom environment variables."""
        reset_global_settings()

        with patch.dict(
            os.environ,
            {
                "SECRET_KEY": "custom-secret-key",
                "APP_ENV": "production",
                "MAX_SIMULATION_MONTHS": "480",
                "LOG_LEVEL": "ERROR",
            },
            clear=True,
        ):
            app = create_app()

            assert app.config["SECRET_KEY"] == "custom-secret-key"
            assert app.config["MAX_SIMULATION_MONTHS"] == 480
            assert app.config["ENV"] == "development"  # flask_env default
            assert app.config["DEBUG"] is False  # production env
            assert app.logger.level == 40

    def test_app_debug_mode_based_on_environment(self):
        """Test that debug mode is set based on APP_ENV."""
        reset_global_settings()
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "development"},
            clear=True,
        ):
            app = create_app()
            assert app.config["DEBUG"] is True

        reset_global_settings()
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "production"},
            clear=True,
        ):
            app = create_app()
            assert app.config["DEBUG"] is False

        reset_global_settings()
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "testing"},
            clear=True,
        ):
            app = create_app()
            assert app.config["DEBUG"] is False
            assert app.config["TESTING"] is True
