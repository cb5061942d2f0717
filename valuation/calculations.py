"""Helper functions for resale value calculations."""

import math
from datetime import date
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta

from .reference import ProjectionSettings, TrendRule
from .trend import Trend


def calc_vehicle_age(year: int, as_of: date) -> int:
    """Whole years since the model year, never negative."""
    return max(0, as_of.year - year)


def calc_depreciation_factor(age: int, rate: float, floor: float) -> float:
    """
    Linear depreciation with a floor.

    factor = max(floor, 1 - age * rate), so old vehicles keep at least
    `floor` of their base price.
    """
    return max(floor, 1.0 - age * rate)


def calc_age_impact(age: int, per_year: float) -> float:
    return -age * per_year


def calc_mileage_impact(
    mileage: float, age: int, expected_per_year: float, divisor: float
) -> float:
    """
    Impact of mileage relative to the expected mileage for the vehicle's age.

    Fewer miles than expected gives a positive impact, more gives negative.
    """
    expected = expected_per_year * age
    return (expected - mileage) / divisor


def select_trend(rules: Sequence[TrendRule], age: int) -> Trend:
    """First rule matching the age wins; STABLE if the table is empty."""
    for rule in rules:
        if rule.matches(age):
            return rule.trend
    return Trend.STABLE


def calc_projection_change(
    month_offset: int, settings: ProjectionSettings, noise: float
) -> float:
    """Relative value change for a month offset: drift * offset + noise."""
    return month_offset * settings.drift + noise


def calc_projection_date(as_of: date, month_offset: int) -> date:
    """Calendar date a number of months after as_of."""
    return as_of + relativedelta(months=month_offset)


def resolve_purchase_price(purchase_price: Optional[float]) -> Optional[float]:
    """Usable purchase price, or None when missing, non-positive or not finite."""
    if purchase_price is None or not math.isfinite(purchase_price):
        return None
    if purchase_price <= 0:
        return None
    return float(purchase_price)
