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
Clock Module

Single source of "now" for the schedule engine. A test-mode override date
replaces the real date everywhere the engine reads the current instant.
"""

import logging
from datetime import date, datetime, time
from typing import Optional, Union

import pytz

logger = logging.getLogger("frisbot.schedule.clock")

DATE_FORMAT_HELP = "Use format: YYYY-MM-DD (e.g., 2024-01-15) or YYYY-MM-DDTHH:MM"


class InvalidDateInput(ValueError):
    """Raised when an override date string cannot be parsed."""

    pass


def validate_timezone(tz_name: str) -> bool:
    """
    Validate that a timezone name is valid.

    Args:
        tz_name: IANA timezone name (e.g., "Europe/Prague")

    Returns:
        True if valid, False otherwise
    """
    try:
        pytz.timezone(tz_name)
        return True
    except pytz.UnknownTimeZoneError:
        return False


def localize(tz: pytz.BaseTzInfo, value: datetime) -> datetime:
    """Attach tz to a naive local datetime, or convert an aware one into tz."""
    if value.tzinfo is None:
        return tz.localize(value)
    return value.astimezone(tz)


def parse_override_date(value: str) -> Union[date, datetime]:
    """
    Parse a test-mode override.

    Accepts a plain date ("2024-01-15") or a local date-time
    ("2024-01-15T20:30", "2024-01-15 20:30:00").

    Raises:
        InvalidDateInput: If the value is empty or malformed
    """
    value = (value or "").strip()
    if not value:
        raise InvalidDateInput(f"Empty date. {DATE_FORMAT_HELP}")

    if len(value) == 10:
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise InvalidDateInput(f"Invalid date '{value}'. {DATE_FORMAT_HELP}")

    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise InvalidDateInput(f"Invalid date '{value}'. {DATE_FORMAT_HELP}")


class Clock:
    """
    Reads the current instant in the configured zone.

    With a date-only override, the overridden date is combined with the real
    wall-clock time, so daily ticks still happen at their configured times.
    A date-time override pins "now" completely.
    """

    def __init__(
        self,
        tz: pytz.BaseTzInfo,
        override: Optional[Union[date, datetime]] = None,
    ):
        self.tz = tz
        self.override = override

    @classmethod
    def from_settings(
        cls, timezone: str, test_mode: bool, override_date: Optional[str]
    ) -> "Clock":
        """
        Build a clock from raw settings.

        Raises:
            InvalidDateInput: If test mode is on and the override is malformed
        """
        tz = pytz.timezone(timezone)
        override = None
        if test_mode and override_date:
            override = parse_override_date(override_date)
            logger.warning(f"Test mode: clock pinned to {override.isoformat()}")
        return cls(tz, override)

    def with_override(self, value: Union[str, date, datetime]) -> "Clock":
        """Return a copy of this clock pinned to another date."""
        if isinstance(value, str):
            value = parse_override_date(value)
        return Clock(self.tz, value)

    @property
    def is_overridden(self) -> bool:
        return self.override is not None

    def now(self) -> datetime:
        real_now = datetime.now(self.tz)
        if self.override is None:
            return real_now
        if isinstance(self.override, datetime):
            return localize(self.tz, self.override)
        return localize(self.tz, datetime.combine(self.override, real_now.time()))

    def today(self) -> date:
        return self.now().date()

    def at(self, day: date, time_of_day: time) -> datetime:
        """Zone-aware datetime for a local date and time."""
        return self.tz.localize(datetime.combine(day, time_of_day))
