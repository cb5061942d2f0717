"""ReferenceData - lookup tables and constants used by the estimator."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .brand_tier import BrandTier
from .trend import Trend


def normalize_name(name: str) -> str:
    """Case- and whitespace-insensitive key for makes and models."""
    return " ".join(name.split()).casefold()


@dataclass(frozen=True)
class TrendRule:
    """Decision table row: applies while vehicle age <= max_age (None = any age)."""

    trend: Trend
    max_age: Optional[int] = None

    def matches(self, age: int) -> bool:
        return self.max_age is None or age <= self.max_age


@dataclass(frozen=True)
class TierSettings:
    """Per-tier depreciation, market sentiment and trend rules."""

    tier: BrandTier
    depreciation_rate: float
    trend_rules: Tuple[TrendRule, ...]
    makes: Tuple[str, ...] = ()
    market_condition: Optional[float] = None  # None: drawn at random


@dataclass(frozen=True)
class ProjectionSettings:
    """Monthly drift and noise band for one trend direction."""

    drift: float
    noise_low: float
    noise_high: float


@dataclass(frozen=True)
class ReferenceData:
    """
    Injected reference data for resale value estimation.

    Holds the (make, model) price table, brand tiers with their
    depreciation rates and trend rules, projection settings per trend,
    and the scalar constants of the valuation formula.
    """

    prices: Dict[str, Dict[str, float]]
    tiers: Dict[BrandTier, TierSettings]
    projection: Dict[Trend, ProjectionSettings]
    default_price: float = 35000
    depreciation_floor: float = 0.3
    age_impact_per_year: float = 0.025
    expected_miles_per_year: float = 12000
    mileage_impact_divisor: float = 100000
    unknown_mileage_impact_range: Tuple[float, float] = (-0.15, 0.05)
    unknown_market_condition_range: Tuple[float, float] = (-0.10, 0.15)
    _price_index: Dict[str, Dict[str, float]] = field(
        init=False, repr=False, compare=False
    )
    _tier_index: Dict[str, BrandTier] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        price_index: Dict[str, Dict[str, float]] = {}
        for make, models in self.prices.items():
            by_model = price_index.setdefault(normalize_name(make), {})
            for model, price in models.items():
                by_model[normalize_name(model)] = price
        tier_index = {}
        for settings in self.tiers.values():
            for make in settings.makes:
                tier_index[normalize_name(make)] = settings.tier
        object.__setattr__(self, "_price_index", price_index)
        object.__setattr__(self, "_tier_index", tier_index)

    def reference_price(self, make: str, model: str) -> Optional[float]:
        """Tabled price for a make/model (case-insensitive), or None."""
        return self._price_index.get(normalize_name(make), {}).get(normalize_name(model))

    def tier_for(self, make: str) -> BrandTier:
        """Brand tier for a make; unlisted makes fall into DEFAULT."""
        return self._tier_index.get(normalize_name(make), BrandTier.DEFAULT)

    def tier_settings(self, tier: BrandTier) -> TierSettings:
        return self.tiers[tier]

    def price_rows(self, make: Optional[str] = None) -> List[Tuple[str, str, float]]:
        """Flatten the price table to (make, model, price) rows, sorted."""
        rows = []
        for table_make, models in self.prices.items():
            if make is not None and normalize_name(table_make) != normalize_name(make):
                continue
            for model, price in models.items():
                rows.append((table_make, model, price))
        return sorted(rows, key=lambda r: (r[0].casefold(), r[1].casefold()))
