from __future__ import annotations

from roadmap import config
from roadmap.config import env_int


def test_env_int_reads_valid_values(monkeypatch):
    monkeypatch.setenv("ROADMAP_TEST_TIMEOUT", " 30 ")
    assert env_int("ROADMAP_TEST_TIMEOUT", 12) == 30


def test_env_int_falls_back_on_malformed_values(monkeypatch):
    monkeypatch.setenv("ROADMAP_TEST_TIMEOUT", "twelve")
    assert env_int("ROADMAP_TEST_TIMEOUT", 12) == 12
    monkeypatch.setenv("ROADMAP_TEST_TIMEOUT", "")
    assert env_int("ROADMAP_TEST_TIMEOUT", 12) == 12
    monkeypatch.delenv("ROADMAP_TEST_TIMEOUT")
    assert env_int("ROADMAP_TEST_TIMEOUT", 12) == 12


def test_timeout_setting_is_an_int():
    assert isinstance(config.HTTP_TIMEOUT_S, int)
