"""
Vehicle resale value estimation.

This package estimates what a vehicle passport's vehicle is worth:
- Trend: Expected value direction (INCREASING, DECREASING, STABLE)
- BrandTier: Brand classes driving depreciation
- VehicleDescriptor: Valuation input
- ValuationResult: Current value, projection, trend and market factors
- ReferenceData: Injected price table and constants
- estimate: The valuation itself
"""

from .trend import Trend
from .brand_tier import BrandTier
from .vehicle import VehicleDescriptor
from .result import MarketFactors, PriceSource, ProjectionPoint, ValuationResult
from .reference import ProjectionSettings, ReferenceData, TierSettings, TrendRule
from .calculations import (
    calc_vehicle_age,
    calc_depreciation_factor,
    calc_age_impact,
    calc_mileage_impact,
    select_trend,
)
from .loader import (
    ReferenceDataError,
    default_reference_data,
    load_reference_data,
    load_vehicles,
)
from .estimator import estimate

__all__ = [
    "Trend",
    "BrandTier",
    "VehicleDescriptor",
    "MarketFactors",
    "PriceSource",
    "ProjectionPoint",
    "ValuationResult",
    "ProjectionSettings",
    "ReferenceData",
    "TierSettings",
    "TrendRule",
    "calc_vehicle_age",
    "calc_depreciation_factor",
    "calc_age_impact",
    "calc_mileage_impact",
    "select_trend",
    "ReferenceDataError",
    "default_reference_data",
    "load_reference_data",
    "load_vehicles",
    "estimate",
]
