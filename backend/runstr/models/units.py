"""
Unit normalization and time formatting helpers.

Distances are compared in kilometers, paces in seconds per kilometer.
All clock decompositions floor their components.
"""
import math
from typing import Literal

DistanceUnit = Literal["km", "mi"]
ElevationUnit = Literal["meters", "feet"]

KM_PER_MILE = 1.60934
MILE_PACE_FACTOR = 0.621371


def normalize_distance_unit(unit: str) -> str:
    """
    Map a distance unit word to "km" or "mi".

    Accepts km, kilometer(s), mi, mile(s) in any case. Anything else is
    returned lower-cased so validation can reject it.
    """
    word = unit.strip().lower()
    if word.startswith("k"):
        return "km"
    if word.startswith("mi"):
        return "mi"
    return word


def normalize_elevation_unit(unit: str) -> str:
    """Map m/meters/metres to "meters" and ft/feet to "feet"."""
    word = unit.strip().lower()
    if word.startswith("m"):
        return "meters"
    if word.startswith("f"):
        return "feet"
    return word


def distance_to_km(value: float, unit: str) -> float:
    """Convert a distance to kilometers. Kilometers pass through unchanged."""
    if normalize_distance_unit(unit) == "mi":
        return value * KM_PER_MILE
    return value


def pace_to_seconds_per_km(seconds_per_unit: float, unit: str) -> float:
    """Convert a pace in seconds per unit to seconds per kilometer."""
    if normalize_distance_unit(unit) == "mi":
        return seconds_per_unit * MILE_PACE_FACTOR
    return seconds_per_unit


def format_clock(total_seconds: float) -> str:
    """Format seconds as HH:MM:SS."""
    hours = math.floor(total_seconds / 3600)
    minutes = math.floor((total_seconds % 3600) / 60)
    seconds = math.floor(total_seconds % 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_pace(minutes: int, seconds: int, unit: str) -> str:
    """Format a pace as M:SS/unit."""
    return f"{minutes}:{seconds:02d}/{unit}"


def format_seconds_per_km(pace_seconds: float) -> str:
    """Format a pace given in seconds per kilometer as M:SS/km."""
    return format_pace(math.floor(pace_seconds / 60), math.floor(pace_seconds % 60), "km")


def format_number(value: float) -> str:
    """Render a float without a trailing .0 for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
