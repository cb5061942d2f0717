#!/usr/bin/env python3
"""Tests for ValuationResult and its parts."""
from datetime import date

import pytest

from valuation import (
    BrandTier,
    MarketFactors,
    PriceSource,
    ProjectionPoint,
    Trend,
    ValuationResult,
)


def make_result(trend=Trend.INCREASING, values=(20000, 20200, 20400, 20800)):
    projection = tuple(
        ProjectionPoint(month_offset=i, date=date(2025, 6 + i, 1), value=v)
        for i, v in enumerate(values)
    )
    return ValuationResult(
        current_value=20000,
        projection=projection,
        trend=trend,
        factors=MarketFactors(
            mileage_impact=0.06, age_impact=-0.05, market_condition_impact=0.05
        ),
        base_price=25000,
        price_source=PriceSource.TABLE,
        brand_tier=BrandTier.HIGH_RETENTION,
        vehicle_age=2,
        as_of=date(2025, 6, 1),
    )


class TestProjectionPoint:
    """Tests for ProjectionPoint."""

    def test_month_name(self):
        point = ProjectionPoint(month_offset=1, date=date(2025, 7, 1), value=100)
        assert point.month_name == "Jul"


class TestValuationResult:
    """Tests for ValuationResult derived values."""

    def test_trend_percentage(self):
        """Last point 20,800 vs current 20,000 is +4%."""
        assert make_result().trend_percentage == pytest.approx(4.0)

    def test_formatted_current_value(self):
        assert make_result().formatted_current_value == "$20,000"

    def test_formatted_trend_percentage_increasing(self):
        assert make_result().formatted_trend_percentage == "+4.0%"

    def test_formatted_trend_percentage_decreasing(self):
        result = make_result(Trend.DECREASING, (20000, 19500, 19000, 18500))
        assert result.formatted_trend_percentage == "-7.5%"

    def test_formatted_trend_percentage_stable_has_no_sign(self):
        result = make_result(Trend.STABLE, (20000, 20100, 19900, 19800))
        assert result.formatted_trend_percentage == "1.0%"

    def test_to_dict(self):
        data = make_result().to_dict()
        assert data["currentValue"] == 20000
        assert data["basePrice"] == 25000
        assert data["priceSource"] == "table"
        assert data["brandTier"] == "high_retention"
        assert data["vehicleAge"] == 2
        assert data["asOf"] == "2025-06-01"
        assert data["trend"] == "increasing"
        assert data["trendPercentage"] == 4.0
        assert [p["monthOffset"] for p in data["projection"]] == [0, 1, 2, 3]
        assert data["projection"][3] == {
            "monthOffset": 3,
            "date": "2025-09-01",
            "value": 20800,
        }
        assert data["factors"] == {
            "mileageImpact": 0.06,
            "ageImpact": -0.05,
            "marketConditionImpact": 0.05,
        }
