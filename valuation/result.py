"""ValuationResult dataclass and its parts."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Tuple

from .brand_tier import BrandTier
from .trend import Trend


class PriceSource(Enum):
    """Where the base price of a valuation came from."""

    TABLE = "table"
    PURCHASE_PRICE = "purchase_price"
    DEFAULT = "default"


@dataclass(frozen=True)
class ProjectionPoint:
    """Projected value a number of months after the valuation date."""

    month_offset: int
    date: date
    value: float

    @property
    def month_name(self) -> str:
        """Abbreviated month name for chart labels (e.g. 'Jan')."""
        return self.date.strftime("%b")


@dataclass(frozen=True)
class MarketFactors:
    """
    Diagnostic breakdown shown alongside a valuation.

    These impacts are informational and are not applied to current_value.
    """

    mileage_impact: float
    age_impact: float
    market_condition_impact: float


@dataclass(frozen=True)
class ValuationResult:
    """Estimated resale value with projection and trend."""

    current_value: float
    projection: Tuple[ProjectionPoint, ...]
    trend: Trend
    factors: MarketFactors
    base_price: float
    price_source: PriceSource
    brand_tier: BrandTier
    vehicle_age: int
    as_of: date

    @property
    def trend_percentage(self) -> float:
        """Change from current value to the last projected point, in percent."""
        if not self.projection or self.current_value == 0:
            return 0.0
        last = self.projection[-1]
        return (last.value - self.current_value) / self.current_value * 100

    @property
    def formatted_current_value(self) -> str:
        return f"${self.current_value:,.0f}"

    @property
    def formatted_trend_percentage(self) -> str:
        """Trend percentage with a direction sign, e.g. '+4.2%'."""
        return f"{self.trend.sign}{abs(self.trend_percentage):.1f}%"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-friendly dict (camelCase keys)."""
        return {
            "currentValue": round(self.current_value, 2),
            "basePrice": round(self.base_price, 2),
            "priceSource": self.price_source.value,
            "brandTier": self.brand_tier.value,
            "vehicleAge": self.vehicle_age,
            "asOf": self.as_of.isoformat(),
            "trend": self.trend.value,
            "trendPercentage": round(self.trend_percentage, 2),
            "projection": [
                {
                    "monthOffset": p.month_offset,
                    "date": p.date.isoformat(),
                    "value": round(p.value, 2),
                }
                for p in self.projection
            ],
            "factors": {
                "mileageImpact": self.factors.mileage_impact,
                "ageImpact": self.factors.age_impact,
                "marketConditionImpact": self.factors.market_condition_impact,
            },
        }
