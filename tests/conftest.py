"""Global test configuration and fixtures."""

import types
from unittest.mock import MagicMock

import pytest

from fund_variation.data.client import FintualHttpClient
from fund_variation.data.endpoints import get_fund
from fund_variation.data.models import DailyRecord, FundHistory
from fund_variation.math import VariationStatistics


@pytest.fixture
def scenario_days():
    """Two months of flat records: +5% in January, -2% in February."""
    return [
        {"date": "2023-01-05", "price": 1000},
        {"date": "2023-01-28", "price": 1050},
        {"date": "2023-02-03", "price": 1050},
        {"date": "2023-02-25", "price": 1029},
    ]


@pytest.fixture
def api_payload(scenario_days):
    """The scenario days wrapped the way the Fintual API returns them."""
    return {
        "data": [
            {
                "id": str(index),
                "type": "day",
                "attributes": {
                    "date": day["date"],
                    "price": day["price"],
                    "net_asset_value": 123456,
                    "total_assets": None,
                },
            }
            for index, day in enumerate(scenario_days)
        ]
    }


@pytest.fixture
def scenario_history(scenario_days):
    """A loaded history for fund 186 built from the scenario days."""
    return FundHistory(
        fund=get_fund(186),
        records=[DailyRecord(date=day["date"], price=day["price"]) for day in scenario_days],
    )


@pytest.fixture
def mock_fintual_client():
    """A client double whose ``get_days`` serves canned raw days per fund id."""
    client = MagicMock(spec=FintualHttpClient)

    def prime(days_by_fund: dict[int, list[dict]]):
        def get_days_side_effect(asset_id: int):
            if asset_id in days_by_fund:
                return days_by_fund[asset_id]
            raise FileNotFoundError(f"No canned days for fund {asset_id}")

        client.get_days.side_effect = get_days_side_effect
        return client

    return prime


@pytest.fixture(autouse=True)
def fast_plots(monkeypatch):
    # Keep matplotlib out of CLI tests; write an empty file where the PNG would go.
    def _fake_plot(charts, *, output_dir, filename="variation.png", config=None):
        path = output_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")
        stats = VariationStatistics(
            average=1.5,
            max=5.0,
            min=-2.0,
            positive_count=1,
            negative_count=1,
            total_months=2,
        )
        return types.SimpleNamespace(path=path, statistics={c.label: stats for c in charts})

    import cli.main as m

    monkeypatch.setattr(m, "generate_variation_plot", _fake_plot)
