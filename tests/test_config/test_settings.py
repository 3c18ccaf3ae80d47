"""Tests for environment-driven shell configuration."""

import pytest
from pydantic import ValidationError

from wezo.config.settings import LoggingSettings, Settings, ShellSettings


def test_shell_defaults():
    shell = ShellSettings()

    assert shell.base_path == "/"
    assert shell.initial_route == "home"
    assert shell.hook_timeout is None
    assert shell.after_hook_timeout == 5.0
    assert shell.max_redirects == 10


@pytest.mark.parametrize("variable", ["SHELL_BASE_PATH", "APP_BASE"])
def test_base_path_read_from_environment(monkeypatch, variable):
    monkeypatch.setenv(variable, "/app")

    assert ShellSettings().base_path == "/app"


def test_base_path_must_be_absolute():
    with pytest.raises(ValidationError):
        ShellSettings(base_path="app")


def test_timeouts_read_from_environment(monkeypatch):
    monkeypatch.setenv("SHELL_HOOK_TIMEOUT", "2.5")
    monkeypatch.setenv("SHELL_DIALOG_TIMEOUT", "30")

    shell = ShellSettings()

    assert shell.hook_timeout == 2.5
    assert shell.dialog_timeout == 30.0


def test_non_positive_timeout_is_rejected():
    with pytest.raises(ValidationError):
        ShellSettings(after_hook_timeout=0)


def test_log_level_is_normalized():
    assert LoggingSettings(level="debug").level == "DEBUG"
    with pytest.raises(ValidationError):
        LoggingSettings(level="chatty")


def test_log_format_is_normalized():
    assert LoggingSettings(format="Console").format == "console"
    with pytest.raises(ValidationError):
        LoggingSettings(format="xml")


def test_login_shell_variable_does_not_leak_into_settings(monkeypatch):
    monkeypatch.setenv("SHELL", "/bin/bash")

    loaded = Settings()

    assert loaded.shell.base_path == "/"
    assert loaded.shell.initial_route == "home"


def test_nested_shell_override_uses_prefixed_delimiter(monkeypatch):
    monkeypatch.setenv("WEZO_SHELL__HISTORY_LIMIT", "7")

    assert Settings().shell.history_limit == 7


def test_environment_is_validated():
    assert Settings(environment="Test").environment == "test"
    with pytest.raises(ValidationError):
        Settings(environment="moon")
