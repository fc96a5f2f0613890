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
Occurrence Projector Module

Turns weekly slots into concrete dated sessions: whether a given day has
training, and when the next session after a given instant is.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

import pytz

from .calendar import (
    ConfigurationError,
    RegimeConfig,
    ResolvedOccurrence,
    WeeklySlot,
    day_of_week,
)
from .clock import localize
from .resolver import SeasonResolver

logger = logging.getLogger("frisbot.schedule.projector")


class OccurrenceProjector:
    """
    Projects weekly slots onto the calendar.

    Args:
        resolver: Season resolver for the configured calendar
        tz: The single zone all slot times are expressed in
    """

    def __init__(self, resolver: SeasonResolver, tz: pytz.BaseTzInfo):
        self.resolver = resolver
        self.tz = tz

    def slots_on(self, day: date) -> list[WeeklySlot]:
        """All slots of day's regime that fall on day's weekday, in configured order."""
        regime = self.resolver.resolve(day)
        weekday = day_of_week(day)
        return [slot for slot in regime.slots if slot.day_of_week == weekday]

    def has_occurrence_on(self, day: date) -> Optional[WeeklySlot]:
        """
        First slot (configured order) scheduled on day, or None.

        When several slots share a weekday only the first is returned; use
        slots_on() to see all of them.
        """
        slots = self.slots_on(day)
        return slots[0] if slots else None

    def occurrence_on(self, day: date, slot: WeeklySlot) -> ResolvedOccurrence:
        """Build the concrete occurrence of slot on day."""
        regime = self.resolver.resolve(day)
        return self._resolved(regime, slot, day)

    def next_occurrence(self, instant: datetime) -> ResolvedOccurrence:
        """
        Earliest session strictly after instant.

        Raises:
            ConfigurationError: If a regime involved has no slots
        """
        instant = localize(self.tz, instant)
        regime = self.resolver.resolve(instant)
        occurrence = self._earliest(regime, instant)

        incoming = self.resolver.resolve(occurrence.date)
        if incoming.name == regime.name:
            return occurrence

        # The candidate lies past a season boundary; the incoming regime's
        # slots apply from its first day on.
        season_start = self.resolver.season_start(occurrence.date)
        start = self.tz.localize(datetime.combine(season_start, time.min))
        after = max(instant, start - timedelta(microseconds=1))
        logger.debug(
            f"Next occurrence crosses into {incoming.name} on {season_start}, "
            f"projecting from there"
        )
        return self._earliest(incoming, after)

    def _earliest(self, regime: RegimeConfig, instant: datetime) -> ResolvedOccurrence:
        if not regime.slots:
            raise ConfigurationError(
                f"Regime '{regime.name}' has no practice slots configured"
            )

        today = instant.date()
        weekday = day_of_week(today)
        best: Optional[ResolvedOccurrence] = None

        for slot in regime.slots:
            days_ahead = (slot.day_of_week - weekday + 7) % 7
            candidate_day = today + timedelta(days=days_ahead)
            starts_at = self.tz.localize(datetime.combine(candidate_day, slot.time_of_day))
            if starts_at <= instant:
                candidate_day += timedelta(days=7)
                starts_at = self.tz.localize(
                    datetime.combine(candidate_day, slot.time_of_day)
                )
            if best is None or starts_at < best.starts_at:
                best = self._resolved(regime, slot, candidate_day, starts_at)

        return best

    def _resolved(
        self,
        regime: RegimeConfig,
        slot: WeeklySlot,
        day: date,
        starts_at: Optional[datetime] = None,
    ) -> ResolvedOccurrence:
        if starts_at is None:
            starts_at = self.tz.localize(datetime.combine(day, slot.time_of_day))
        return ResolvedOccurrence(
            date=day,
            day_of_week=day_of_week(day),
            regime_name=regime.name,
            slot=slot,
            effective_location=regime.effective_location(slot),
            starts_at=starts_at,
        )
