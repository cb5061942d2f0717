"""BrandTier enum for coarse brand classification."""

from enum import Enum


class BrandTier(Enum):
    """Brand classes driving depreciation and market sentiment."""

    HIGH_RETENTION = "high_retention"
    RELIABLE_MAINSTREAM = "reliable_mainstream"
    LUXURY = "luxury"
    DEFAULT = "default"  # Any make not listed in a tier

    @property
    def label(self) -> str:
        """Human-readable tier name."""
        return self.value.replace("_", " ").capitalize()
