"""Bucket 3-hour forecast samples into local calendar days.

Timestamps are shifted by the location's UTC offset once, up front, and the
shifted value is then read as if it were UTC. Date keys, hour-of-day checks
and display labels all work on that shifted value, so the offset is never
applied twice.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, List

from skycast.providers.base import RawForecastSample

MAX_DAYS = 5

# Local hours [start, end) preferred for a day's headline sample.
REPRESENTATIVE_HOUR_START = 12
REPRESENTATIVE_HOUR_END = 18


@dataclass
class DayGroup:
    """Samples that fall on one local calendar day, in arrival order."""
    date_key: str
    samples: List[RawForecastSample] = field(default_factory=list)

    @property
    def temp_low(self) -> float:
        return min(s.temp_min for s in self.samples)

    @property
    def temp_high(self) -> float:
        return max(s.temp_max for s in self.samples)


def local_wall_clock(epoch_seconds: int, utc_offset_seconds: int) -> dt.datetime:
    """Shifted timestamp as a UTC-tagged datetime whose fields read as local time."""
    return dt.datetime.fromtimestamp(epoch_seconds + utc_offset_seconds, tz=dt.timezone.utc)


def date_key(epoch_seconds: int, utc_offset_seconds: int) -> str:
    """Local calendar date as YYYY-MM-DD."""
    return local_wall_clock(epoch_seconds, utc_offset_seconds).strftime("%Y-%m-%d")


def hour_label(epoch_seconds: int, utc_offset_seconds: int) -> str:
    """Local time as "3 PM" / "12 AM"."""
    local = local_wall_clock(epoch_seconds, utc_offset_seconds)
    hour12 = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    if local.minute:
        return f"{hour12}:{local.minute:02d} {suffix}"
    return f"{hour12} {suffix}"


def date_label(key: str) -> str:
    """"2024-07-22" -> "Mon, Jul 22"."""
    day = dt.date.fromisoformat(key)
    return f"{day.strftime('%a')}, {day.strftime('%b')} {day.day}"


def group_by_local_day(
    samples: List[RawForecastSample],
    utc_offset_seconds: int,
    *,
    max_days: int = MAX_DAYS,
) -> List[DayGroup]:
    """Group samples by local date, keeping arrival order and the first `max_days` dates."""
    groups: Dict[str, DayGroup] = {}
    for sample in samples:
        key = date_key(sample.epoch_seconds, utc_offset_seconds)
        group = groups.get(key)
        if group is None:
            if len(groups) >= max_days:
                continue
            group = groups[key] = DayGroup(date_key=key)
        group.samples.append(sample)
    return list(groups.values())


def pick_representative(group: DayGroup, utc_offset_seconds: int) -> RawForecastSample:
    """First afternoon sample, else the middle one (the only one for a single-sample day)."""
    if not group.samples:
        raise ValueError(f"Day group {group.date_key} has no samples")
    for sample in group.samples:
        hour = local_wall_clock(sample.epoch_seconds, utc_offset_seconds).hour
        if REPRESENTATIVE_HOUR_START <= hour < REPRESENTATIVE_HOUR_END:
            return sample
    return group.samples[len(group.samples) // 2]
