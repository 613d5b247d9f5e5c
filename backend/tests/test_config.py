from __future__ import annotations

from startupcall.core.config import Settings
from startupcall.shared.enums import Env


def test_cors_origins_accept_comma_separated_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.test, https://b.test")
    assert Settings(_env_file=None).cors_origins == ["https://a.test", "https://b.test"]


def test_dev_auth_is_off_only_in_prod():
    assert Settings(_env_file=None, env=Env.dev).dev_auth_enabled is True
    assert Settings(_env_file=None, env=Env.test).dev_auth_enabled is True
    assert Settings(_env_file=None, env=Env.prod).dev_auth_enabled is False


def test_cors_origins_accept_json_list(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", '["https://a.test"]')
    assert Settings(_env_file=None).cors_origins == ["https://a.test"]
