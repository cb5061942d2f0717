"""VehicleDescriptor class for valuation input."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class VehicleDescriptor:
    """Vehicle attributes needed to estimate resale value."""

    make: str
    model: str
    year: int
    purchase_price: Optional[float] = None
    mileage: Optional[int] = None

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.year} {self.make} {self.model}"
