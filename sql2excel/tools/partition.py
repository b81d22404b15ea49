"""Partition boundary generation.

A partition descriptor ``(type, begin, end)`` is turned into an ordered list
of boundary timestamps.  ``begin`` is normalised to the start of its day and
``end`` to the end of its day, steps advance by calendar unit, and the
normalised ``end`` is always the last boundary so the tail of the range is
never dropped.

Adjacent boundaries are consumed pairwise by :func:`iter_partitions`, which
yields inclusive ``(begin, end)`` date pairs covering the whole range.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Iterator, List, Sequence

from dateutil.relativedelta import relativedelta

from sql2excel.util.errors import InvalidDateRange, UnsupportedGranularity

LOGGER = logging.getLogger(__name__)

_END_OF_DAY = time(23, 59, 59)
_ONE_DAY = timedelta(days=1)


class Granularity(Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: Any) -> "Granularity":
        """Return the granularity for ``day``/``daily``, ``month``/``monthly``... spellings."""
        text = str(value or "").strip().lower()
        granularity = _GRANULARITY_ALIASES.get(text)
        if granularity is None:
            raise UnsupportedGranularity(f"unsupported partition type: {value!r}")
        return granularity

    def step(self, count: int) -> relativedelta:
        if self is Granularity.DAILY:
            return relativedelta(days=count)
        if self is Granularity.MONTHLY:
            return relativedelta(months=count)
        return relativedelta(years=count)


_GRANULARITY_ALIASES = {
    "day": Granularity.DAILY,
    "daily": Granularity.DAILY,
    "month": Granularity.MONTHLY,
    "monthly": Granularity.MONTHLY,
    "year": Granularity.YEARLY,
    "yearly": Granularity.YEARLY,
}


@dataclass(frozen=True)
class PartitionSpec:
    """Partition descriptor as read from configuration.

    ``begin`` and ``end`` are kept as given (ISO strings or dates) and are
    validated by :func:`generate_partitions`.
    """

    type: str
    begin: Any
    end: Any


@dataclass(frozen=True)
class Partition:
    """Inclusive date range processed as one report."""

    begin: date
    end: date


def _parse_day(value: Any, label: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidDateRange(f"cannot parse partition {label} {value!r}: {exc}") from exc
    raise InvalidDateRange(f"cannot parse partition {label} {value!r}")


def generate_partitions(spec: PartitionSpec) -> List[datetime]:
    """Return the ordered boundaries ``[t0, ..., tn]`` for *spec*.

    ``t0`` is ``begin`` at 00:00:00 and ``tn`` is ``end`` at 23:59:59.  Month
    and year steps are taken from the ``begin`` anchor, so a range starting on
    the 31st lands on the last day of shorter months.

    Raises
    ------
    UnsupportedGranularity
        When ``spec.type`` is not a known granularity.
    InvalidDateRange
        When ``begin``/``end`` cannot be parsed or ``end`` is before ``begin``.
    """
    granularity = Granularity.parse(spec.type)
    begin = datetime.combine(_parse_day(spec.begin, "begin"), time.min)
    end = datetime.combine(_parse_day(spec.end, "end"), _END_OF_DAY)
    if end < begin:
        raise InvalidDateRange(
            f"partition end {end.date().isoformat()} is before begin {begin.date().isoformat()}"
        )

    boundaries: List[datetime] = []
    steps = 0
    current = begin
    while current < end:
        boundaries.append(current)
        steps += 1
        current = begin + granularity.step(steps)
    boundaries.append(end)

    LOGGER.debug(
        "Generated %d %s partition(s) for %s..%s",
        len(boundaries) - 1,
        granularity.value,
        begin.date(),
        end.date(),
    )
    return boundaries


def iter_partitions(boundaries: Sequence[datetime]) -> Iterator[Partition]:
    """Yield inclusive partitions from adjacent boundary pairs.

    Every partition ends the day before the next boundary, except the last one
    which ends on the final boundary itself.
    """
    last = len(boundaries) - 2
    for index in range(len(boundaries) - 1):
        begin = boundaries[index].date()
        if index == last:
            end = boundaries[index + 1].date()
        else:
            end = boundaries[index + 1].date() - _ONE_DAY
        yield Partition(begin=begin, end=end)
