"""Shared fixtures for integration tests."""

import pytest
import yaml


@pytest.fixture
def plans_file(tmp_path):
    """YAML config with accepted, warned, rejected and manual-reserve plans."""
    data = {
        "available_balance": "2000",
        "plans": [
            {
                "name": "btc-long",
                "symbol": "BTCUSDT",
                "lower_price": "50000",
                "upper_price": "60000",
                "grid_count": 50,
                "investment": "1000",
                "leverage": 10,
                "maintenance_margin_rate": "0.004",
            },
            {
                "name": "btc-neutral-tight",
                "symbol": "BTCUSDT",
                "lower_price": "55000",
                "upper_price": "65000",
                "grid_count": 100,
                "investment": "1000",
                "leverage": 20,
                "maintenance_margin_rate": "0.005",
                "direction": "NEUTRAL",
            },
            {
                "name": "btc-under-margined",
                "symbol": "BTCUSDT",
                "lower_price": "50000",
                "upper_price": "60000",
                "grid_count": 50,
                "investment": "1000",
                "leverage": 10,
                "maintenance_margin_rate": "0.07",
            },
            {
                "name": "btc-manual-999",
                "symbol": "BTCUSDT",
                "lower_price": "50000",
                "upper_price": "60000",
                "grid_count": 50,
                "investment": "1000",
                "leverage": 10,
                "maintenance_margin_rate": "0.004",
                "auto_reserve_margin": False,
                "manual_reserved_margin": "999",
                "available_balance": "1000",
            },
        ],
    }
    path = tmp_path / "plans.yaml"
    path.write_text(yaml.dump(data))
    return path
