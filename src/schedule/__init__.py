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
Seasonal Schedule Package

Season resolution, occurrence projection and the daily reminder trigger.
"""

from .calendar import (
    DAY_NAMES,
    ConfigurationError,
    DateBoundary,
    RegimeConfig,
    ResolvedOccurrence,
    SeasonCalendar,
    WeeklySlot,
    day_of_week,
)
from .clock import Clock, InvalidDateInput, parse_override_date, validate_timezone
from .projector import OccurrenceProjector
from .resolver import SeasonResolver
from .trigger import ReminderTrigger

__all__ = [
    "DAY_NAMES",
    "ConfigurationError",
    "DateBoundary",
    "RegimeConfig",
    "ResolvedOccurrence",
    "SeasonCalendar",
    "WeeklySlot",
    "day_of_week",
    "Clock",
    "InvalidDateInput",
    "parse_override_date",
    "validate_timezone",
    "OccurrenceProjector",
    "SeasonResolver",
    "ReminderTrigger",
]
