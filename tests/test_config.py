import logging

from seafood_order import config


def test_timeout_uses_the_environment(monkeypatch):
    monkeypatch.setenv("SEAFOOD_NOTIFY_TIMEOUT", "4.5")

    assert config._env_float("SEAFOOD_NOTIFY_TIMEOUT", 15.0) == 4.5


def test_bad_timeout_falls_back_to_default(monkeypatch, caplog):
    for raw in ("soon", "-3", "nan"):
        monkeypatch.setenv("SEAFOOD_NOTIFY_TIMEOUT", raw)
        with caplog.at_level(logging.WARNING, logger="seafood_order.config"):
            assert config._env_float("SEAFOOD_NOTIFY_TIMEOUT", 15.0) == 15.0

    assert "invalid_config name=SEAFOOD_NOTIFY_TIMEOUT" in caplog.text


def test_unset_timeout_uses_default(monkeypatch):
    monkeypatch.delenv("SEAFOOD_NOTIFY_TIMEOUT", raising=False)

    assert config._env_float("SEAFOOD_NOTIFY_TIMEOUT", 15.0) == 15.0
