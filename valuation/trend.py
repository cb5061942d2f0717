"""Trend enum for the expected near-term direction of resale value."""

from enum import Enum


class Trend(Enum):
    """Qualitative resale value direction."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"

    @property
    def color(self) -> str:
        """Display color for the trend arrow."""
        colors = {
            Trend.INCREASING: "green",
            Trend.DECREASING: "red",
            Trend.STABLE: "orange",
        }
        return colors[self]

    @property
    def icon_name(self) -> str:
        """Icon shown next to the value."""
        icons = {
            Trend.INCREASING: "arrow.up.circle.fill",
            Trend.DECREASING: "arrow.down.circle.fill",
            Trend.STABLE: "minus.circle.fill",
        }
        return icons[self]

    @property
    def sign(self) -> str:
        """Prefix used when formatting a percentage change."""
        if self is Trend.INCREASING:
            return "+"
        if self is Trend.DECREASING:
            return "-"
        return ""
