from __future__ import annotations

import pytest

from doorsurvey.normalizer import (
    HEIGHT_OFFSET_DIGIT,
    WIDTH_OFFSET_DIGIT,
    apply_accurate_values,
    first_decimal_digit,
    normalize,
    normalize_record,
)

from builders import record


@pytest.mark.parametrize(
    ("value", "offset", "expected"),
    [
        (72.4, 4, 72.0),
        (72.2, 4, 71.6),
        (72.9, 2, 72.7),
        (72.2, 2, 72.0),
        (30.0, 4, 29.4),
        (30.0, 2, 29.6),
        (0.7, 4, 0.3),
        (81.45, 4, 81.0),
    ],
)
def test_normalize_matches_correction_rule(value: float, offset: int, expected: float) -> None:
    assert normalize(value, offset) == pytest.approx(expected)


def test_normalize_borrow_wraps_on_base_eight() -> None:
    # delta = 1 - 4 = -3 -> one inch borrowed, (8 - 3) tenths added back
    assert normalize(50.1, HEIGHT_OFFSET_DIGIT) == pytest.approx(49.5)


def test_normalize_is_deterministic() -> None:
    assert normalize(64.3, WIDTH_OFFSET_DIGIT) == normalize(64.3, WIDTH_OFFSET_DIGIT)


@pytest.mark.parametrize(
    ("value", "digit"),
    [(72.4, 4), (72.0, 0), (72, 0), (0.05, 0), (1e-05, 0), (3.99, 9), (12.5e1, 0)],
)
def test_first_decimal_digit(value: float, digit: int) -> None:
    assert first_decimal_digit(value) == digit


def test_normalize_record_uses_per_axis_offsets() -> None:
    out = normalize_record(record("A-1", height=72.2, width=72.9))
    assert out.height_value == pytest.approx(71.6)
    assert out.width_value == pytest.approx(72.7)
    assert out.flat_label == "A-1"


def test_apply_accurate_values_disabled_passes_values_through() -> None:
    records = [record("A-1", height=72.2, width=72.9)]
    out = apply_accurate_values(records, False)
    assert out == records


def test_apply_accurate_values_does_not_mutate_input() -> None:
    original = record("A-1", height=72.2, width=72.9)
    out = apply_accurate_values([original], True)
    assert original.height_value == 72.2
    assert out[0].height_value == pytest.approx(71.6)
