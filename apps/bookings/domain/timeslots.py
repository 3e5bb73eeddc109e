"""
Operating-hour slot schedule

A day is open from 06:00 to 22:00 local time and split into sixteen
one-hour slots. A slot is available when it overlaps none of the busy
intervals of the day (end is exclusive, so a booking ending at 15:00
leaves the 15:00 slot free).
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterable, Iterator, Tuple

from shared.domain.value_objects import TimeRange

OPERATING_START_HOUR = 6
OPERATING_END_HOUR = 22
SLOT_LENGTH = timedelta(hours=1)


@dataclass(frozen=True)
class Slot:
    start: datetime
    end: datetime
    available: bool

    @property
    def period(self) -> TimeRange:
        return TimeRange(self.start, self.end)

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "available": self.available,
        }


class SlotSchedule:
    """
    Slots of one operating day

    Iterating yields :class:`Slot` objects lazily; the schedule can be
    iterated any number of times and always yields the same sixteen slots.
    """

    def __init__(self, day: date, busy: Iterable[TimeRange], tz: tzinfo):
        self.day = day
        self.tz = tz
        self._busy: Tuple[TimeRange, ...] = tuple(busy)

    def __iter__(self) -> Iterator[Slot]:
        for hour in range(OPERATING_START_HOUR, OPERATING_END_HOUR):
            start = datetime.combine(self.day, time(hour), tzinfo=self.tz)
            period = TimeRange(start, start + SLOT_LENGTH)
            available = not any(period.overlaps_with(busy) for busy in self._busy)
            yield Slot(start=period.start, end=period.end, available=available)

    def __len__(self) -> int:
        return OPERATING_END_HOUR - OPERATING_START_HOUR

    def available(self) -> Iterator[Slot]:
        return (slot for slot in self if slot.available)

    def unavailable(self) -> Iterator[Slot]:
        return (slot for slot in self if not slot.available)
