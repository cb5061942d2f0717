"""YAML loading utilities for reference data and garage files."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml
from jsonschema import ValidationError, validate

from .brand_tier import BrandTier
from .reference import (
    ProjectionSettings,
    ReferenceData,
    TierSettings,
    TrendRule,
    normalize_name,
)
from .trend import Trend
from .vehicle import VehicleDescriptor

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_REFERENCE_FILE = DATA_DIR / "reference.yaml"


class ReferenceDataError(ValueError):
    """A reference or garage file could not be parsed or failed validation."""


def load_schema(name: str) -> dict:
    """Load a bundled JSON schema ('reference' or 'garage')."""
    with open(DATA_DIR / f"{name}_schema.yaml") as f:
        return yaml.safe_load(f)


def _load_validated(filename: Union[str, Path], schema_name: str) -> Dict[str, Any]:
    """Load raw YAML and validate it against a bundled schema."""
    with open(filename, "rb") as fp:
        try:
            data = yaml.load(fp, Loader=yaml.SafeLoader)
        except yaml.YAMLError as e:
            raise ReferenceDataError(f"{filename}: YAML parse error: {e}") from e
    try:
        validate(instance=data, schema=load_schema(schema_name))
    except ValidationError as e:
        message = f"{filename}: schema validation error: {e.message}"
        if e.path:
            message += f" at path: {'.'.join(str(p) for p in e.path)}"
        raise ReferenceDataError(message) from e
    return data


def _parse_range(dct: Dict[str, float]) -> Tuple[float, float]:
    return (dct["min"], dct["max"])


def _parse_tier(tier: BrandTier, dct: Dict[str, Any]) -> TierSettings:
    rules = tuple(
        TrendRule(Trend(r["trend"]), r.get("maxAge")) for r in dct["trend"]
    )
    if rules[-1].max_age is not None:
        raise ReferenceDataError(
            f"Trend table for tier '{tier.value}' must end with a rule without maxAge"
        )
    return TierSettings(
        tier=tier,
        depreciation_rate=dct["depreciationRate"],
        trend_rules=rules,
        makes=tuple(dct.get("makes") or ()),
        market_condition=dct.get("marketCondition"),
    )


def _parse_reference(data: Dict[str, Any]) -> ReferenceData:
    """Build ReferenceData from validated YAML, keeping dataclass defaults."""
    tiers = {
        BrandTier(key): _parse_tier(BrandTier(key), value)
        for key, value in data["tiers"].items()
    }
    seen: Dict[str, BrandTier] = {}
    for settings in tiers.values():
        for make in settings.makes:
            key = normalize_name(make)
            if key in seen and seen[key] != settings.tier:
                raise ReferenceDataError(
                    f"Make '{make}' is listed in tiers '{seen[key].value}' "
                    f"and '{settings.tier.value}'"
                )
            seen[key] = settings.tier
    projection = {
        Trend(key): ProjectionSettings(
            drift=value["drift"],
            noise_low=value["noise"]["min"],
            noise_high=value["noise"]["max"],
        )
        for key, value in data["projection"].items()
    }
    prices = {
        str(make): {str(model): price for model, price in (models or {}).items()}
        for make, models in data["prices"].items()
    }

    scalars: Dict[str, Any] = {}
    if "defaultPrice" in data:
        scalars["default_price"] = data["defaultPrice"]
    if "depreciationFloor" in data:
        scalars["depreciation_floor"] = data["depreciationFloor"]
    if "ageImpactPerYear" in data:
        scalars["age_impact_per_year"] = data["ageImpactPerYear"]
    if "expectedMilesPerYear" in data:
        scalars["expected_miles_per_year"] = data["expectedMilesPerYear"]
    if "mileageImpactDivisor" in data:
        scalars["mileage_impact_divisor"] = data["mileageImpactDivisor"]
    if "unknownMileageImpact" in data:
        scalars["unknown_mileage_impact_range"] = _parse_range(
            data["unknownMileageImpact"]
        )
    if "unknownMarketCondition" in data:
        scalars["unknown_market_condition_range"] = _parse_range(
            data["unknownMarketCondition"]
        )

    return ReferenceData(prices=prices, tiers=tiers, projection=projection, **scalars)


def load_reference_data(filename: Union[str, Path, None] = None) -> ReferenceData:
    """
    Load reference data from a YAML file.

    Uses the bundled reference.yaml when no filename is given.
    Raises ReferenceDataError when the file fails validation.
    """
    if filename is None:
        filename = DEFAULT_REFERENCE_FILE
    data = _load_validated(filename, "reference")
    reference = _parse_reference(data)
    logger.info(
        "Loaded reference data from %s (%d makes priced)",
        filename,
        len(reference.prices),
    )
    return reference


@lru_cache(maxsize=1)
def default_reference_data() -> ReferenceData:
    """Bundled reference data, loaded once per process."""
    return load_reference_data(DEFAULT_REFERENCE_FILE)


def load_vehicles(filename: Union[str, Path]) -> List[VehicleDescriptor]:
    """Load the vehicles listed in a garage YAML file."""
    data = _load_validated(filename, "garage")
    return [
        VehicleDescriptor(
            make=str(v["make"]),
            model=str(v["model"]),
            year=v["year"],
            purchase_price=v.get("purchasePrice"),
            mileage=v.get("mileage"),
        )
        for v in data["vehicles"] or []
    ]
