"""
Tests for settings loading: bundled YAML, user override, environment.
"""

import warnings

import pytest

from rehab_builder.core.config import DEFAULT_API_BASE_URL
from rehab_builder.core.settings import Settings, get_bundled_settings_path, load_settings


@pytest.fixture
def no_user_file(tmp_path):
    return tmp_path / "missing.yaml"


class TestLoadSettings:
    def test_bundled_file_ships_with_package(self):
        assert get_bundled_settings_path().exists()

    def test_bundled_defaults(self, no_user_file):
        settings = load_settings(user_path=no_user_file, environ={})
        assert settings == Settings(
            api_base_url=DEFAULT_API_BASE_URL,
            timeout_seconds=30.0,
            default_frequency=1,
            default_break_interval=30,
        )

    def test_user_override_merges(self, tmp_path):
        user = tmp_path / "settings.yaml"
        user.write_text("api:\n  base_url: https://clinic.example/api\nschedule:\n  frequency: 2\n")
        settings = load_settings(user_path=user, environ={})
        assert settings.api_base_url == "https://clinic.example/api"
        assert settings.timeout_seconds == 30.0
        assert settings.default_frequency == 2
        assert settings.default_break_interval == 30

    def test_environment_wins_over_user_file(self, tmp_path):
        user = tmp_path / "settings.yaml"
        user.write_text("api:\n  base_url: https://clinic.example/api\n")
        settings = load_settings(
            user_path=user,
            environ={"REHAB_BUILDER_API_URL": "http://env:1/api", "REHAB_BUILDER_TIMEOUT": "5"},
        )
        assert settings.api_base_url == "http://env:1/api"
        assert settings.timeout_seconds == 5.0

    def test_broken_user_file_warns_and_is_ignored(self, tmp_path):
        user = tmp_path / "settings.yaml"
        user.write_text("api: [unclosed\n")
        with pytest.warns(UserWarning, match="ignoring user settings"):
            settings = load_settings(user_path=user, environ={})
        assert settings.api_base_url == DEFAULT_API_BASE_URL

    @pytest.mark.parametrize(
        "text",
        [
            "api: foo\n",
            "schedule:\n  frequency: abc\n",
            "api:\n  timeout_seconds: [1, 2]\n",
        ],
    )
    def test_wrongly_typed_user_file_warns_and_is_ignored(self, tmp_path, text):
        user = tmp_path / "settings.yaml"
        user.write_text(text)
        with pytest.warns(UserWarning, match="ignoring user settings"):
            settings = load_settings(user_path=user, environ={})
        assert settings.api_base_url == DEFAULT_API_BASE_URL
        assert settings.default_frequency == 1
        assert settings.timeout_seconds == 30.0

    def test_wrongly_typed_user_file_keeps_environment(self, tmp_path):
        user = tmp_path / "settings.yaml"
        user.write_text("api: foo\n")
        with pytest.warns(UserWarning):
            settings = load_settings(user_path=user, environ={"REHAB_BUILDER_API_URL": "http://env:1/api"})
        assert settings.api_base_url == "http://env:1/api"

    def test_bad_timeout_env_warns(self, no_user_file):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            settings = load_settings(user_path=no_user_file, environ={"REHAB_BUILDER_TIMEOUT": "soon"})
        assert settings.timeout_seconds == 30.0
        assert any("not a number" in str(w.message) for w in caught)
