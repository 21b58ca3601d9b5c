from __future__ import annotations

import logging

import pytest

from qlconflicts.config import (
    MissingConfigurationError,
    RetryPolicy,
    configure_logging,
    env_list,
    get_remote_api_config,
    optional_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", " value ")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_names_every_missing_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    assert optional_env_var("EXAMPLE_VAR") is None


def test_env_list_splits_and_drops_blanks(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_LIST", "wording, , translation ,")

    assert env_list("EXAMPLE_LIST") == ("wording", "translation")
    assert env_list("UNSET_EXAMPLE_LIST") == ()


def test_remote_api_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QLCONFLICTS_API_URL", "https://conflicts.example.com/")
    monkeypatch.setenv("QLCONFLICTS_API_PASSWORD", "hunter2")

    config = get_remote_api_config()

    assert config.base_url == "https://conflicts.example.com"
    assert config.resilience.base_url == "https://conflicts.example.com"
    assert config.resilience.retry == RetryPolicy(total=3)
    assert "POST" not in config.resilience.retry.allowed_methods
    assert "hunter2" not in repr(config)


def test_remote_api_config_requires_url_and_password(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("QLCONFLICTS_API_URL", raising=False)
    monkeypatch.delenv("QLCONFLICTS_API_PASSWORD", raising=False)

    with pytest.raises(MissingConfigurationError, match="QLCONFLICTS_API_PASSWORD"):
        get_remote_api_config()


def test_configure_logging_uses_env_level(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)

    configure_logging(force=True)

    assert captured["level"] == "DEBUG"
    assert captured["force"] is True


def test_configure_logging_defaults_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)

    configure_logging()

    assert captured["level"] == logging.INFO
