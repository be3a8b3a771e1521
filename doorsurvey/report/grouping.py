"""Partition measurement records into report sections and order them."""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Iterable

from ..domain_models import DoorCategory, MeasurementRecord, parse_category
from .report_data import GroupedMeasurements, ReportEntry

LOGGER = logging.getLogger(__name__)


def collation_key(text: str) -> tuple[str, str]:
    """Case- and accent-insensitive ordering key with lowercase sorting first on a tie."""
    folded = unicodedata.normalize("NFKD", text.casefold())
    base = "".join(ch for ch in folded if not unicodedata.combining(ch))
    return base, text.swapcase()


def _sort_key(entry: ReportEntry, multi_group: bool) -> tuple[tuple[str, str], ...]:
    if multi_group:
        return collation_key(entry.group_label or ""), collation_key(entry.flat_label)
    return (collation_key(entry.flat_label),)


def group_measurements(
    records: Iterable[MeasurementRecord],
    *,
    multi_group: bool,
) -> GroupedMeasurements:
    buckets: dict[DoorCategory, list[ReportEntry]] = {c: [] for c in DoorCategory}
    dropped = 0
    for record in records:
        category = parse_category(record.category)
        if category is None:
            dropped += 1
            continue
        buckets[category].append(
            ReportEntry(
                flat_label=record.flat_label,
                height_value=record.height_value,
                width_value=record.width_value,
                group_label=(record.group_label or "") if multi_group else None,
            )
        )
    if dropped:
        LOGGER.debug("Dropped %d record(s) with unrecognised category", dropped)

    def _ordered(category: DoorCategory) -> tuple[ReportEntry, ...]:
        return tuple(sorted(buckets[category], key=lambda e: _sort_key(e, multi_group)))

    return GroupedMeasurements(
        primary=_ordered(DoorCategory.PRIMARY),
        secondary=_ordered(DoorCategory.SECONDARY),
        entry=_ordered(DoorCategory.ENTRY),
    )
