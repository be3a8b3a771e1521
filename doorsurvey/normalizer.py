"""Accurate-size correction for raw door measurements.

A surveyed opening is recorded to the tenth of an inch; the "accurate" size
printed on the report remaps that tenths digit against a fixed per-axis
offset.  Heights use offset 4 and widths offset 2.  When the tenths digit is
below the offset the value borrows from the whole inches and wraps on a
base of 8.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal

from .domain_models import MeasurementRecord

HEIGHT_OFFSET_DIGIT = 4
WIDTH_OFFSET_DIGIT = 2
TENTHS_WRAP_BASE = 8


def first_decimal_digit(value: float) -> int:
    """Return the first digit after the decimal point of *value*.

    Uses the shortest round-tripping text form of the float, so ``72.4``
    yields ``4`` rather than whatever its binary expansion ends in.
    """
    text = format(Decimal(repr(float(value))), "f")
    _, _, fraction = text.partition(".")
    return int(fraction[0]) if fraction else 0


def normalize(value: float, offset_digit: int) -> float:
    decimal_digit = first_decimal_digit(value)
    delta = decimal_digit - offset_digit
    if delta < 0:
        return (math.floor(value) - 1) + (TENTHS_WRAP_BASE - abs(delta)) / 10
    return math.floor(value) + delta / 10


def normalize_record(
    record: MeasurementRecord,
    *,
    height_offset: int = HEIGHT_OFFSET_DIGIT,
    width_offset: int = WIDTH_OFFSET_DIGIT,
) -> MeasurementRecord:
    return replace(
        record,
        height_value=normalize(record.height_value, height_offset),
        width_value=normalize(record.width_value, width_offset),
    )


def apply_accurate_values(
    records: Iterable[MeasurementRecord],
    enabled: bool,
    *,
    height_offset: int = HEIGHT_OFFSET_DIGIT,
    width_offset: int = WIDTH_OFFSET_DIGIT,
) -> list[MeasurementRecord]:
    """Return *records* corrected to accurate sizes, or unchanged when disabled."""
    if not enabled:
        return list(records)
    return [
        normalize_record(r, height_offset=height_offset, width_offset=width_offset)
        for r in records
    ]
