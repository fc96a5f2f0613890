# frisbot - Seasonal Training Reminder Bot
# Copyright (c) 2025-2026 Slash Daemon slashdaemon@protonmail.com
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 of the License.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.
#
# Commercial licensing: [slashdaemon@protonmail.com]

"""
Calendar Rules Module

Static description of the two training regimes ("seasons"): where each one
starts in the year, where training happens, and which weekly slots it runs.
Everything here is immutable once loaded.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

# 0=Sunday, matching the weekday numbering used in configuration
DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

REGIME_NAMES = ("winter", "summer")

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
_LINK_PATTERN = re.compile(r"^\[([^\]]+)\]\(([^)\s]+)\)$")


class ConfigurationError(Exception):
    """Raised when the calendar rules cannot describe a valid schedule."""

    pass


def day_of_week(day: date) -> int:
    """Weekday of a date with 0=Sunday."""
    return (day.weekday() + 1) % 7


def parse_slot_time(value: str) -> time:
    """
    Parse an "HH:MM" string into a time of day.

    Raises:
        ConfigurationError: If the value is not a valid 24-hour time
    """
    match = _TIME_PATTERN.match(value.strip())
    if not match:
        raise ConfigurationError(f"Time must be in format HH:MM, got '{value}'")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ConfigurationError(f"Time out of range: '{value}'")
    return time(hour, minute)


def split_location_link(location: str) -> tuple[str, Optional[str]]:
    """
    Split a location into its display name and optional URL.

    "[Park Arena](https://maps.example/abc)" -> ("Park Arena", "https://maps.example/abc")
    "Park Arena" -> ("Park Arena", None)
    """
    match = _LINK_PATTERN.match(location.strip())
    if match:
        return match.group(1).strip(), match.group(2)
    return location.strip(), None


@dataclass(frozen=True)
class DateBoundary:
    """A year-relative start date (month/day)."""

    month: int
    day: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ConfigurationError(f"Boundary month must be 1-12, got {self.month}")
        if self.month == 2 and self.day == 29:
            raise ConfigurationError("Boundary cannot be Feb 29 (missing in most years)")
        try:
            # 2001 is not a leap year, so this rejects Apr 31, Feb 30, ...
            date(2001, self.month, self.day)
        except ValueError:
            raise ConfigurationError(
                f"Boundary {self.month}/{self.day} is not a calendar date"
            )

    def anchor(self, year: int) -> date:
        """Re-anchor this boundary to a concrete year."""
        return date(year, self.month, self.day)

    def sort_key(self) -> tuple[int, int]:
        return (self.month, self.day)


@dataclass(frozen=True)
class WeeklySlot:
    """A weekly training slot: weekday (0=Sunday) and local time."""

    day_of_week: int
    time: str
    location_override: Optional[str] = None

    def __post_init__(self):
        if not 0 <= self.day_of_week <= 6:
            raise ConfigurationError(
                f"Slot day must be 0-6 (0=Sunday), got {self.day_of_week}"
            )
        parse_slot_time(self.time)

    @property
    def time_of_day(self) -> time:
        return parse_slot_time(self.time)

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week]


@dataclass(frozen=True)
class RegimeConfig:
    """One season: its start boundary, default location and weekly slots."""

    name: str
    boundary: DateBoundary
    location: str
    slots: tuple[WeeklySlot, ...] = ()

    def __post_init__(self):
        if self.name not in REGIME_NAMES:
            raise ConfigurationError(
                f"Regime name must be one of {REGIME_NAMES}, got '{self.name}'"
            )
        if not self.location or not self.location.strip():
            raise ConfigurationError(f"Regime '{self.name}' needs a location")
        # Accept lists from callers but store an immutable tuple
        object.__setattr__(self, "slots", tuple(self.slots))

    def effective_location(self, slot: WeeklySlot) -> str:
        """Slot override if present, else the regime location."""
        return slot.location_override or self.location

    def distinct_times(self) -> list[str]:
        """Slot times in configured order, without duplicates."""
        seen: list[str] = []
        for slot in self.slots:
            if slot.time not in seen:
                seen.append(slot.time)
        return seen


@dataclass(frozen=True)
class SeasonCalendar:
    """
    The pair of regimes that partition the year.

    Construction checks the partition (two distinct regimes, boundaries that
    do not coincide). Empty slot lists are only rejected by
    require_slots(), so startup validation and the projector can report
    them as configuration errors separately.
    """

    first: RegimeConfig
    second: RegimeConfig

    def __post_init__(self):
        if self.first.name == self.second.name:
            raise ConfigurationError(
                f"Both regimes are named '{self.first.name}'"
            )
        if self.first.boundary == self.second.boundary:
            raise ConfigurationError(
                f"Regimes '{self.first.name}' and '{self.second.name}' start on "
                f"the same date ({self.first.boundary.month}/{self.first.boundary.day})"
            )

    @property
    def regimes(self) -> tuple[RegimeConfig, RegimeConfig]:
        return (self.first, self.second)

    def get(self, name: str) -> RegimeConfig:
        for regime in self.regimes:
            if regime.name == name:
                return regime
        raise KeyError(name)

    def require_slots(self) -> None:
        """
        Raises:
            ConfigurationError: If either regime has no weekly slots
        """
        for regime in self.regimes:
            if not regime.slots:
                raise ConfigurationError(
                    f"Regime '{regime.name}' has no practice slots configured"
                )


@dataclass(frozen=True)
class ResolvedOccurrence:
    """A concrete, dated training session."""

    date: date
    day_of_week: int
    regime_name: str
    slot: WeeklySlot
    effective_location: str
    starts_at: datetime

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week]
