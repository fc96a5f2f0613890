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
Reminder Trigger Module

Daily task loops, one per distinct practice time, that send the reminder the
day before a session. Uses discord.ext.tasks for reliable scheduling.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Awaitable, Callable, Optional

import pytz
from discord.ext import tasks

from .calendar import ResolvedOccurrence, parse_slot_time
from .clock import Clock
from .projector import OccurrenceProjector

logger = logging.getLogger("frisbot.schedule.trigger")

Dispatch = Callable[[ResolvedOccurrence], Awaitable[None]]

# Days past today whose regimes contribute armed times
LOOKAHEAD_DAYS = 2


class ReminderTrigger:
    """
    Arms one daily loop per practice time and fires reminders.

    Each loop ticks once a day at its local time and asks the projector
    whether tomorrow has a session at that time. A separate refresh loop
    runs once a day to arm times introduced by a season change. Armed loops
    are never cancelled before stop(); a loop whose time no longer appears
    in the active season simply finds nothing to send.
    """

    def __init__(
        self,
        projector: OccurrenceProjector,
        clock: Clock,
        dispatch: Dispatch,
        wait_until_ready: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        """
        Initialize the trigger.

        Args:
            projector: Occurrence projector for the configured calendar
            clock: Clock providing "now" (honors the test-mode override)
            dispatch: Coroutine called with the occurrence to remind about
            wait_until_ready: Optional coroutine awaited before loops start
        """
        self.projector = projector
        self.clock = clock
        self.dispatch = dispatch
        self.wait_until_ready = wait_until_ready
        self._loops: dict[time, tasks.Loop] = {}
        self._started = False

    @property
    def tz(self) -> pytz.BaseTzInfo:
        return self.clock.tz

    def start(self) -> None:
        """Start the refresh loop, which arms the practice-time loops."""
        if not self._started:
            self._refresh.start()
            self._started = True
            logger.info("Reminder trigger started")

    def stop(self) -> None:
        """Stop the refresh loop and every armed loop."""
        if self._started:
            self._refresh.cancel()
            self._started = False
            logger.info("Reminder trigger stopped")
        for loop in self._loops.values():
            loop.cancel()
        self._loops.clear()

    def armed_times(self) -> list[time]:
        return sorted(self._loops)

    def wanted_times(self, today: date) -> list[time]:
        """
        Practice times to keep armed around today.

        Looks two days ahead. The refresh runs once a day at an arbitrary
        time, so a time first used by the new season must already be armed
        two days before the boundary to tick on its eve.
        """
        wanted: list[time] = []
        for offset in range(LOOKAHEAD_DAYS + 1):
            day = today + timedelta(days=offset)
            regime = self.projector.resolver.resolve(day)
            for value in regime.distinct_times():
                slot_time = parse_slot_time(value)
                if slot_time not in wanted:
                    wanted.append(slot_time)
        return wanted

    def due_occurrence(
        self, now: datetime, slot_time: time
    ) -> Optional[ResolvedOccurrence]:
        """
        Occurrence a tick at slot_time should remind about, if any.

        The reminder goes out at the session's own time of day, one day
        ahead. Tomorrow's season is used, which can differ from today's on
        the eve of a boundary.
        """
        tomorrow = now.date() + timedelta(days=1)
        if self.projector.has_occurrence_on(tomorrow) is None:
            return None

        for slot in self.projector.slots_on(tomorrow):
            if slot.time_of_day == slot_time:
                return self.projector.occurrence_on(tomorrow, slot)
        return None

    async def fire(self, slot_time: time) -> Optional[ResolvedOccurrence]:
        """Handle one tick of the loop armed for slot_time."""
        try:
            now = self.clock.now()
            occurrence = self.due_occurrence(now, slot_time)
            if occurrence is None:
                logger.info(
                    f"Tick {slot_time.strftime('%H:%M')}: no training tomorrow at this time"
                )
                return None

            logger.info(
                f"Tick {slot_time.strftime('%H:%M')}: training tomorrow "
                f"({occurrence.day_name} {occurrence.date}, {occurrence.regime_name}), sending reminder"
            )
            await self.dispatch(occurrence)
            return occurrence

        except Exception as e:
            logger.error(f"Error in reminder tick {slot_time}: {e}", exc_info=True)
            return None

    def utc_time(self, slot_time: time, day: date) -> time:
        """UTC time of day matching slot_time in the local zone on day."""
        local = self.tz.localize(datetime.combine(day, slot_time))
        return local.astimezone(pytz.UTC).timetz()

    def _next_tick_day(self, slot_time: time, now: datetime) -> date:
        if now.time() >= slot_time:
            return now.date() + timedelta(days=1)
        return now.date()

    def _arm(self, slot_time: time, now: datetime) -> None:
        when = self.utc_time(slot_time, self._next_tick_day(slot_time, now))

        async def tick() -> None:
            await self.fire(slot_time)

        loop = tasks.loop(time=when)(tick)
        if self.wait_until_ready is not None:
            loop.before_loop(self.wait_until_ready)
        loop.start()
        self._loops[slot_time] = loop
        logger.info(
            f"Armed daily check at {slot_time.strftime('%H:%M')} {self.tz.zone} "
            f"({when.strftime('%H:%M')} UTC)"
        )

    def _realign(self, slot_time: time, now: datetime) -> None:
        """Follow DST changes by moving the loop's UTC time."""
        loop = self._loops[slot_time]
        when = self.utc_time(slot_time, self._next_tick_day(slot_time, now))
        if loop.time and loop.time[0] != when:
            loop.change_interval(time=when)
            logger.info(
                f"Realigned {slot_time.strftime('%H:%M')} check to {when.strftime('%H:%M')} UTC"
            )

    def refresh(self) -> list[time]:
        """Arm every wanted time that has no loop yet. Returns newly armed times."""
        now = self.clock.now()
        newly_armed = []
        for slot_time in self.wanted_times(now.date()):
            if slot_time in self._loops:
                self._realign(slot_time, now)
            else:
                self._arm(slot_time, now)
                newly_armed.append(slot_time)

        regime = self.projector.resolver.resolve(now)
        logger.info(
            f"Season check: {regime.name} active, armed times "
            f"{[t.strftime('%H:%M') for t in self.armed_times()]}"
        )
        return newly_armed

    @tasks.loop(hours=24)
    async def _refresh(self) -> None:
        """Once-daily season check."""
        try:
            self.refresh()
        except Exception as e:
            logger.error(f"Error refreshing reminder schedule: {e}", exc_info=True)

    @_refresh.before_loop
    async def _before_refresh(self) -> None:
        if self.wait_until_ready is not None:
            await self.wait_until_ready()
