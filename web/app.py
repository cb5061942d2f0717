"""Flask web application serving resale value estimates as JSON."""

import math
import os
import random
from datetime import date
from pathlib import Path

from flask import Flask, jsonify, request

# Add parent directory to path for package imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from valuation import VehicleDescriptor, estimate, load_reference_data
from valuation.logging_config import configure_logging

configure_logging(
    os.environ.get("LOG_LEVEL", "INFO"),
    os.environ.get("LOG_FORMAT", "json"),
    quiet=("werkzeug",),
)

app = Flask(__name__)

# Reference data is loaded once; the endpoints are stateless
REFERENCE = load_reference_data(os.environ.get("VALUATION_REFERENCE_FILE") or None)


class InvalidParameter(Exception):
    """Invalid query parameter."""


def get_str(name: str) -> str:
    value = request.args.get(name, "").strip()
    if not value:
        raise InvalidParameter(f"Missing required parameter '{name}'")
    return value


def get_number(name: str, cast, required: bool = False):
    """Parse an optional numeric query parameter."""
    raw = request.args.get(name, "").strip()
    if not raw:
        if required:
            raise InvalidParameter(f"Missing required parameter '{name}'")
        return None
    try:
        value = cast(raw)
    except ValueError:
        raise InvalidParameter(f"Invalid value for '{name}': {raw!r}") from None
    if not math.isfinite(value):
        raise InvalidParameter(f"Invalid value for '{name}': {raw!r}")
    return value


def get_date(name: str):
    raw = request.args.get(name, "").strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise InvalidParameter(
            f"Invalid date for '{name}': {raw!r} (expected YYYY-MM-DD)"
        ) from None


@app.errorhandler(InvalidParameter)
def handle_invalid_parameter(error: InvalidParameter):
    return jsonify({"error": str(error)}), 400


@app.route("/health")
def health():
    return jsonify({"status": "ok"})


@app.route("/api/estimate")
def api_estimate():
    """Estimate one vehicle from query parameters."""
    vehicle = VehicleDescriptor(
        make=get_str("make"),
        model=get_str("model"),
        year=get_number("year", int, required=True),
        purchase_price=get_number("purchasePrice", float),
        mileage=get_number("mileage", int),
    )
    seed = get_number("seed", int)
    as_of = get_date("asOf")

    result = estimate(
        vehicle,
        reference=REFERENCE,
        rng=random.Random(seed),
        as_of=as_of,
    )
    payload = result.to_dict()
    payload["vehicle"] = vehicle.name
    return jsonify(payload)


@app.route("/api/reference/prices")
def api_prices():
    """Reference price table, optionally filtered by make."""
    make = request.args.get("make") or None
    rows = [
        {"make": m, "model": model, "price": price}
        for m, model, price in REFERENCE.price_rows(make)
    ]
    return jsonify({"defaultPrice": REFERENCE.default_price, "prices": rows})


if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=5001)
