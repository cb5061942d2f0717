#!/usr/bin/env python3
"""
Command-line resale value estimates for vehicle passports.

Commands:
  estimate - Estimate the resale value of one vehicle
  garage   - Estimate every vehicle in a garage YAML file
  prices   - List the reference price table
  tiers    - List brand tiers and their depreciation settings
"""

import argparse
import random
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from valuation import (
    BrandTier,
    ReferenceDataError,
    ValuationResult,
    VehicleDescriptor,
    estimate,
    load_reference_data,
    load_vehicles,
)
from valuation.logging_config import configure_logging

# =============================================================================
# Formatting helpers
# =============================================================================


def format_money(value: Optional[float]) -> str:
    """Format a dollar amount for display."""
    return f"${value:,.0f}" if value is not None else "-"


def format_miles(miles: Optional[float]) -> str:
    """Format mileage for display."""
    return f"{miles:,.0f}" if miles is not None else "-"


def format_impact(impact: float) -> str:
    """Format a relative impact as a signed percentage (e.g. '-2.5%')."""
    return f"{impact * 100:+.1f}%"


def format_age_limit(max_age: Optional[int]) -> str:
    return f"<= {max_age} yr" if max_age is not None else "older"


# =============================================================================
# Estimate command
# =============================================================================


def make_projection_table(result: ValuationResult) -> List[List[str]]:
    """Convert projection points to table rows."""
    rows = []
    for point in result.projection:
        if result.current_value:
            change = format_impact(
                (point.value - result.current_value) / result.current_value
            )
        else:
            change = "-"
        rows.append(
            [
                f"+{point.month_offset}mo",
                point.date.isoformat(),
                format_money(point.value),
                change,
            ]
        )
    return rows


def cmd_estimate(args, reference, rng, as_of):
    """Estimate the resale value of one vehicle."""
    vehicle = VehicleDescriptor(
        make=args.make,
        model=args.model,
        year=args.year,
        purchase_price=args.purchase_price,
        mileage=args.mileage,
    )
    result = estimate(vehicle, reference=reference, rng=rng, as_of=as_of)

    print(f"Vehicle: {vehicle.name}")
    print(f"Mileage: {format_miles(vehicle.mileage)}")
    print(f"As of: {result.as_of.isoformat()} (age {result.vehicle_age} yr)")
    print(
        f"Base price: {format_money(result.base_price)} "
        f"({result.price_source.value.replace('_', ' ')})"
    )
    print(f"Brand tier: {result.brand_tier.label}")
    print()
    print(f"Estimated value: {result.formatted_current_value}")
    print(f"3-month trend: {result.trend.value} ({result.formatted_trend_percentage})")
    print()

    print("Market factors:")
    print(f"  Mileage:          {format_impact(result.factors.mileage_impact)}")
    print(f"  Age:              {format_impact(result.factors.age_impact)}")
    print(
        f"  Market condition: {format_impact(result.factors.market_condition_impact)}"
    )
    print()

    headers = ["Month", "Date", "Value", "Change"]
    print(tabulate(make_projection_table(result), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Garage command
# =============================================================================


def make_garage_table(
    vehicles: List[VehicleDescriptor], results: List[ValuationResult]
) -> List[List[str]]:
    """Convert vehicles and their valuations to table rows."""
    rows = []
    for vehicle, result in zip(vehicles, results):
        rows.append(
            [
                vehicle.name,
                format_miles(vehicle.mileage),
                format_money(result.base_price),
                result.formatted_current_value,
                result.trend.value,
                result.formatted_trend_percentage,
            ]
        )
    return rows


def cmd_garage(args, reference, rng, as_of):
    """Estimate every vehicle in a garage file."""
    if not args.garage_file.exists():
        print(f"Error: File not found: {args.garage_file}")
        return 1

    vehicles = load_vehicles(args.garage_file)
    print(f"Garage: {args.garage_file}")
    print(f"Vehicles: {len(vehicles)}")
    print()

    if not vehicles:
        print("No vehicles found.")
        return 0

    results = [
        estimate(v, reference=reference, rng=rng, as_of=as_of) for v in vehicles
    ]
    total = sum(r.current_value for r in results)

    headers = ["Vehicle", "Mileage", "Base", "Value", "Trend", "3mo"]
    print(
        tabulate(
            make_garage_table(vehicles, results), headers=headers, tablefmt="simple"
        )
    )
    print()
    print(f"Total value: {format_money(total)}")

    return 0


# =============================================================================
# Prices command
# =============================================================================


def cmd_prices(args, reference, rng, as_of):
    """List the reference price table."""
    rows = [
        [make, model, format_money(price), reference.tier_for(make).label]
        for make, model, price in reference.price_rows(args.make)
    ]
    if not rows:
        print(f"No reference prices for make '{args.make}'")
        return 1

    headers = ["Make", "Model", "Price", "Tier"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    print()
    print(f"Default price (unlisted, no purchase price): "
          f"{format_money(reference.default_price)}")

    return 0


# =============================================================================
# Tiers command
# =============================================================================


def cmd_tiers(args, reference, rng, as_of):
    """List brand tiers and their depreciation settings."""
    rows = []
    for tier in BrandTier:
        settings = reference.tier_settings(tier)
        if settings.market_condition is not None:
            market = format_impact(settings.market_condition)
        else:
            low, high = reference.unknown_market_condition_range
            market = f"random {format_impact(low)}..{format_impact(high)}"
        trend = ", ".join(
            f"{format_age_limit(r.max_age)}: {r.trend.value}"
            for r in settings.trend_rules
        )
        makes = ", ".join(settings.makes) if settings.makes else "(all others)"
        rows.append(
            [
                tier.label,
                f"{settings.depreciation_rate * 100:.0f}%/yr",
                market,
                trend,
                makes,
            ]
        )

    headers = ["Tier", "Depreciation", "Market", "Trend", "Makes"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    print()
    print(f"Value floor: {reference.depreciation_floor * 100:.0f}% of base price")

    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle resale value estimator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s estimate Tesla "Model 3" 2023 --mileage 12000
  %(prog)s --seed 42 estimate Toyota Camry 2019
  %(prog)s --as-of 2025-06-01 garage garage/example.yaml
  %(prog)s prices --make Toyota
  %(prog)s --reference my-prices.yaml tiers
""",
    )
    parser.add_argument(
        "--reference",
        type=Path,
        help="Path to reference data YAML file (default: bundled data)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible projections",
    )
    parser.add_argument(
        "--as-of",
        type=str,
        help="Valuation date in YYYY-MM-DD format (default: today)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default="text",
        help="Log output format (default: text)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Estimate subcommand
    estimate_parser = subparsers.add_parser(
        "estimate", help="Estimate the resale value of one vehicle"
    )
    estimate_parser.add_argument("make", type=str, help="Vehicle make (e.g. 'Tesla')")
    estimate_parser.add_argument(
        "model", type=str, help="Vehicle model (e.g. 'Model 3')"
    )
    estimate_parser.add_argument("year", type=int, help="Model year")
    estimate_parser.add_argument(
        "--purchase-price",
        type=float,
        help="Purchase price, used when the model is not in the price table",
    )
    estimate_parser.add_argument(
        "--mileage",
        type=int,
        help="Current mileage",
    )

    # Garage subcommand
    garage_parser = subparsers.add_parser(
        "garage", help="Estimate every vehicle in a garage YAML file"
    )
    garage_parser.add_argument(
        "garage_file",
        type=Path,
        help="Path to garage YAML file",
    )

    # Prices subcommand
    prices_parser = subparsers.add_parser(
        "prices", help="List the reference price table"
    )
    prices_parser.add_argument(
        "--make",
        type=str,
        help="Only show models of this make (case-insensitive)",
    )

    # Tiers subcommand
    subparsers.add_parser("tiers", help="List brand tiers and depreciation settings")

    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_format)

    as_of = None
    if args.as_of:
        try:
            as_of = date.fromisoformat(args.as_of)
        except ValueError:
            print(f"Error: Invalid date '{args.as_of}' (expected YYYY-MM-DD)")
            return 1

    if args.reference is not None and not args.reference.exists():
        print(f"Error: File not found: {args.reference}")
        return 1

    try:
        reference = load_reference_data(args.reference)
    except ReferenceDataError as e:
        print(f"Error: {e}")
        return 1

    rng = random.Random(args.seed)

    # Dispatch to command handler
    try:
        if args.command == "estimate":
            return cmd_estimate(args, reference, rng, as_of)
        elif args.command == "garage":
            return cmd_garage(args, reference, rng, as_of)
        elif args.command == "prices":
            return cmd_prices(args, reference, rng, as_of)
        elif args.command == "tiers":
            return cmd_tiers(args, reference, rng, as_of)
    except ReferenceDataError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
