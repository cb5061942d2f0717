"""Shared fixtures for valuation tests."""

import pytest

from valuation import load_reference_data

# Zero noise makes projections deterministic
FLAT_REFERENCE_YAML = """
defaultPrice: 30000
tiers:
  high_retention:
    depreciationRate: 0.10
    marketCondition: 0.05
    makes: [Acme]
    trend:
      - maxAge: 3
        trend: increasing
      - trend: stable
  reliable_mainstream:
    depreciationRate: 0.15
    marketCondition: 0.0
    makes: [Budget]
    trend:
      - maxAge: 5
        trend: stable
      - trend: decreasing
  luxury:
    depreciationRate: 0.20
    marketCondition: -0.05
    makes: [Posh]
    trend:
      - trend: decreasing
  default:
    depreciationRate: 0.25
    trend:
      - trend: stable
projection:
  increasing:
    drift: 0.02
    noise: {min: 0, max: 0}
  decreasing:
    drift: -0.03
    noise: {min: 0, max: 0}
  stable:
    drift: 0.0
    noise: {min: 0, max: 0}
prices:
  Acme:
    Roadster: 20000
  Posh:
    Limo: 100000
"""


@pytest.fixture
def flat_reference_file(tmp_path):
    path = tmp_path / "reference.yaml"
    path.write_text(FLAT_REFERENCE_YAML)
    return path


@pytest.fixture
def flat_reference(flat_reference_file):
    return load_reference_data(flat_reference_file)
