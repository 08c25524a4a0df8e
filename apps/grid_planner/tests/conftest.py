"""Shared fixtures for grid_planner tests."""

import pytest


@pytest.fixture(autouse=True)
def _isolate_config_path_env_var(monkeypatch):
    """Prevent GRID_PLANNER_CONFIG_PATH from leaking into tests."""
    monkeypatch.delenv("GRID_PLANNER_CONFIG_PATH", raising=False)


@pytest.fixture
def plan_data():
    """Minimal valid plan mapping (1000 USDT at 10x on 50000-60000)."""
    return {
        "name": "btc-long",
        "symbol": "BTCUSDT",
        "lower_price": "50000",
        "upper_price": "60000",
        "grid_count": 50,
        "investment": "1000",
        "leverage": 10,
        "maintenance_margin_rate": "0.004",
    }
