"""Day numbers of advent: integers from 1 to 25."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import total_ordering
from typing import Iterator

FIRST_DAY = 1
LAST_DAY = 25
SERVER_TZ = timezone(timedelta(hours=-5))

_DAY_PATTERN = re.compile(r"\+?[0-9]+")


class DayError(ValueError):
    """Raised when a value is not a day number between 1 and 25."""

    def __init__(self, message: str = "expecting a day number between 1 and 25") -> None:
        super().__init__(message)


@total_ordering
@dataclass(frozen=True, eq=False)
class Day:
    """A valid day of advent, displayed as a two digit number."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise DayError()
        if not FIRST_DAY <= self.value <= LAST_DAY:
            raise DayError()

    @classmethod
    def parse(cls, text: str) -> Day:
        """Parse a day number from text such as ``"8"`` or ``"08"``."""
        if not isinstance(text, str) or not _DAY_PATTERN.fullmatch(text):
            raise DayError()
        return cls(int(text))

    @classmethod
    def today(cls) -> Day | None:
        """Return the current day if it is December 1st to 25th on the server, else None."""
        now = datetime.now(SERVER_TZ)
        if now.month == 12 and now.day <= LAST_DAY:
            return cls(now.day)
        return None

    def __str__(self) -> str:
        return f"{self.value:02}"

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Day):
            return self.value == other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return self.value == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Day):
            return self.value < other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return self.value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)


def all_days() -> Iterator[Day]:
    """Yield every day of advent from the 1st to the 25th."""
    for value in range(FIRST_DAY, LAST_DAY + 1):
        yield Day(value)