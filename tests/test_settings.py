from __future__ import annotations

import logging

from config.settings import AggregationConfig, ImpactConfig, _float_env


def test_float_env_reads_override(monkeypatch):
    monkeypatch.setenv("EQUITY_TREND_FLAT_THRESHOLD", "0.02")
    assert _float_env("EQUITY_TREND_FLAT_THRESHOLD", 0.001) == 0.02


def test_float_env_unset_uses_default(monkeypatch):
    monkeypatch.delenv("EQUITY_FEED_TIMEOUT", raising=False)
    assert _float_env("EQUITY_FEED_TIMEOUT", 15.0) == 15.0


def test_float_env_malformed_value_warns(monkeypatch, caplog):
    monkeypatch.setenv("EQUITY_FEED_TIMEOUT", "fifteen")
    with caplog.at_level(logging.WARNING, logger="config.settings"):
        assert _float_env("EQUITY_FEED_TIMEOUT", 15.0) == 15.0
    assert "EQUITY_FEED_TIMEOUT" in caplog.text
    assert "fifteen" in caplog.text


def test_staleness_falls_back_to_default():
    config = AggregationConfig(staleness_days={"labor": 45, "default": 30})
    assert config.staleness_for("labor") == 45
    assert config.staleness_for("historical") == 30


def test_cost_per_job_lookup_order():
    config = ImpactConfig(by_sector={"logistics": 90_000.0}, by_category={"green": 80_000.0}, default=100_000.0)
    assert config.cost_per_job("logistics", "standard") == 90_000.0
    assert config.cost_per_job("solar", "green") == 80_000.0
    assert config.cost_per_job("retail", "standard") == 100_000.0
