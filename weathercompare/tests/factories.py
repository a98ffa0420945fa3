"""Builders for test data."""

import json
from pathlib import Path

from weathercompare.models.forecast import ForecastPeriod
from weathercompare.models.location import LocationSlot, ResolvedLocation

FIXTURE_DIR = Path(__file__).parent / "fixtures"

CHICAGO = ResolvedLocation(name="Chicago, Illinois", lat=41.8781, lon=-87.6298, state="Illinois")


def load_fixture(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


def make_period(start_time: str, temperature: float | None, **kwargs) -> ForecastPeriod:
    kwargs.setdefault("wind_speed", "0 mph")
    return ForecastPeriod(start_time=start_time, temperature=temperature, **kwargs)


def make_slot(index: int, summaries: dict | None = None, **kwargs) -> LocationSlot:
    kwargs.setdefault("location", ResolvedLocation(name=f"Place {index + 1}", lat=40.0, lon=-90.0))
    return LocationSlot(index=index, summaries=summaries or {}, **kwargs)
