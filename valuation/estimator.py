"""Resale value estimation for a single vehicle."""

import logging
import random
from datetime import date
from typing import Optional, Tuple

from .calculations import (
    calc_age_impact,
    calc_depreciation_factor,
    calc_mileage_impact,
    calc_projection_change,
    calc_projection_date,
    calc_vehicle_age,
    resolve_purchase_price,
    select_trend,
)
from .loader import default_reference_data
from .reference import ReferenceData, TierSettings
from .result import MarketFactors, PriceSource, ProjectionPoint, ValuationResult
from .trend import Trend
from .vehicle import VehicleDescriptor

logger = logging.getLogger(__name__)

PROJECTION_MONTHS = 4


def resolve_base_price(
    vehicle: VehicleDescriptor, reference: ReferenceData
) -> Tuple[float, PriceSource]:
    """
    Base price lookup: price table, then purchase price, then default.
    """
    tabled = reference.reference_price(vehicle.make, vehicle.model)
    if tabled is not None:
        return float(tabled), PriceSource.TABLE
    purchase_price = resolve_purchase_price(vehicle.purchase_price)
    if purchase_price is not None:
        logger.debug("No reference price for %s, using purchase price", vehicle.name)
        return purchase_price, PriceSource.PURCHASE_PRICE
    logger.debug("No reference or purchase price for %s, using default", vehicle.name)
    return float(reference.default_price), PriceSource.DEFAULT


def calc_market_factors(
    vehicle: VehicleDescriptor,
    age: int,
    tier: TierSettings,
    reference: ReferenceData,
    rng: random.Random,
) -> MarketFactors:
    """Diagnostic factors; unknown mileage and unlisted brands are randomized."""
    age_impact = calc_age_impact(age, reference.age_impact_per_year)

    if vehicle.mileage is not None:
        mileage_impact = calc_mileage_impact(
            vehicle.mileage,
            age,
            reference.expected_miles_per_year,
            reference.mileage_impact_divisor,
        )
    else:
        mileage_impact = rng.uniform(*reference.unknown_mileage_impact_range)

    if tier.market_condition is not None:
        market_condition_impact = tier.market_condition
    else:
        market_condition_impact = rng.uniform(
            *reference.unknown_market_condition_range
        )

    return MarketFactors(
        mileage_impact=mileage_impact,
        age_impact=age_impact,
        market_condition_impact=market_condition_impact,
    )


def project_values(
    current_value: float,
    trend: Trend,
    as_of: date,
    reference: ReferenceData,
    rng: random.Random,
) -> Tuple[ProjectionPoint, ...]:
    """Randomized month-by-month projection biased by the trend direction."""
    settings = reference.projection[trend]
    points = []
    for month_offset in range(PROJECTION_MONTHS):
        noise = rng.uniform(settings.noise_low, settings.noise_high)
        change = calc_projection_change(month_offset, settings, noise)
        points.append(
            ProjectionPoint(
                month_offset=month_offset,
                date=calc_projection_date(as_of, month_offset),
                value=current_value * (1.0 + change),
            )
        )
    return tuple(points)


def estimate(
    vehicle: VehicleDescriptor,
    reference: Optional[ReferenceData] = None,
    rng: Optional[random.Random] = None,
    as_of: Optional[date] = None,
) -> ValuationResult:
    """
    Estimate the resale value of a vehicle.

    Logic:
    - Base price from the reference table, else purchase price, else default
    - Depreciate by brand tier rate per year of age, never below the floor
    - Compute diagnostic market factors (not applied to the value)
    - Pick the trend from the tier's age decision table
    - Project 4 monthly points around the current value

    Args:
        reference: Reference data (defaults to the bundled tables)
        rng: Random source for projection noise and unknown factors
        as_of: Valuation date (defaults to today)
    """
    if reference is None:
        reference = default_reference_data()
    if rng is None:
        rng = random.Random()
    if as_of is None:
        as_of = date.today()

    base_price, price_source = resolve_base_price(vehicle, reference)
    age = calc_vehicle_age(vehicle.year, as_of)

    brand_tier = reference.tier_for(vehicle.make)
    tier = reference.tier_settings(brand_tier)
    factor = calc_depreciation_factor(
        age, tier.depreciation_rate, reference.depreciation_floor
    )
    current_value = base_price * factor

    factors = calc_market_factors(vehicle, age, tier, reference, rng)
    trend = select_trend(tier.trend_rules, age)
    projection = project_values(current_value, trend, as_of, reference, rng)

    logger.debug(
        "Estimated %s: %.0f (%s base %.0f, tier %s, age %d, %s)",
        vehicle.name,
        current_value,
        price_source.value,
        base_price,
        brand_tier.value,
        age,
        trend.value,
        extra={
            "vehicle": vehicle.name,
            "price_source": price_source.value,
            "brand_tier": brand_tier.value,
            "vehicle_age": age,
            "trend": trend.value,
            "current_value": round(current_value, 2),
        },
    )

    return ValuationResult(
        current_value=current_value,
        projection=projection,
        trend=trend,
        factors=factors,
        base_price=base_price,
        price_source=price_source,
        brand_tier=brand_tier,
        vehicle_age=age,
        as_of=as_of,
    )
