"""
Imperial to metric conversions used by the weather summaries.

Station files report temperature in Fahrenheit, precipitation in inches and
degree-days on the Fahrenheit scale. Summaries are published in metric.

Degree-days are a temperature *difference* accumulated over time, so they
convert with the 5/9 scale factor only (no 32 degree offset):

    DD_C = DD_F * 5 / 9
"""

from __future__ import annotations

MM_PER_INCH = 25.4


def inches_to_mm(inches: float) -> float:
    """Convert a length in inches to millimetres."""
    return inches * MM_PER_INCH


def mm_to_inches(mm: float) -> float:
    """Convert a length in millimetres to inches."""
    return mm / MM_PER_INCH


def fahrenheit_to_celsius(temp_f: float) -> float:
    """Convert a temperature in Fahrenheit to Celsius."""
    return (temp_f - 32.0) * 5.0 / 9.0


def celsius_to_fahrenheit(temp_c: float) -> float:
    """Convert a temperature in Celsius to Fahrenheit."""
    return temp_c * 9.0 / 5.0 + 32.0


def degree_days_f_to_c(dd_f: float) -> float:
    """Rescale Fahrenheit degree-days to Celsius degree-days, floored at zero.

    Scaling by 5/9 keeps the sign, so the floor only affects a negative
    source value, which is read as "no accumulation" and stored as 0.0.

    Args:
        dd_f: Degree-days on the Fahrenheit scale.

    Returns:
        Degree-days on the Celsius scale (>= 0).
    """
    return max(0.0, dd_f * 5.0 / 9.0)
