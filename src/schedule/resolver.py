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
Season Resolver Module

Decides which regime governs a given date. The regime whose boundary comes
later in the calendar year also covers the start of the next year, up to the
other regime's boundary.
"""

from datetime import date, datetime
from typing import Union

from .calendar import RegimeConfig, SeasonCalendar


def as_date(instant: Union[date, datetime]) -> date:
    """Calendar date of an instant (datetime is a subclass of date)."""
    if isinstance(instant, datetime):
        return instant.date()
    return instant


class SeasonResolver:
    """Resolves the active regime for an instant."""

    def __init__(self, calendar: SeasonCalendar):
        self.calendar = calendar
        ordered = sorted(calendar.regimes, key=lambda r: r.boundary.sort_key())
        # wrapping: later boundary, spans New Year
        self._early, self._wrapping = ordered[0], ordered[1]

    @property
    def wrapping_regime(self) -> RegimeConfig:
        return self._wrapping

    def resolve(self, instant: Union[date, datetime]) -> RegimeConfig:
        """
        Return the regime active on instant's calendar date.

        Time of day is ignored; a date equal to a boundary belongs to the
        regime that boundary starts.
        """
        day = as_date(instant)
        late_start = self._wrapping.boundary.anchor(day.year)
        early_start = self._early.boundary.anchor(day.year)

        if day >= late_start:
            return self._wrapping
        if day < early_start:
            return self._wrapping
        return self._early

    def resolve_name(self, instant: Union[date, datetime]) -> str:
        return self.resolve(instant).name

    def season_start(self, instant: Union[date, datetime]) -> date:
        """Date on which the regime active at instant most recently began."""
        day = as_date(instant)
        regime = self.resolve(day)
        start = regime.boundary.anchor(day.year)
        if start > day:
            start = regime.boundary.anchor(day.year - 1)
        return start
