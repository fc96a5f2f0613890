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

"""Shared fixtures: the default winter/summer calendar in Europe/Prague."""

import sys
from pathlib import Path

import pytest
import pytz

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from schedule.calendar import DateBoundary, RegimeConfig, SeasonCalendar, WeeklySlot
from schedule.projector import OccurrenceProjector
from schedule.resolver import SeasonResolver

TZ = pytz.timezone("Europe/Prague")


def make_calendar(
    winter_start=(9, 15),
    summer_start=(5, 20),
    winter_slots=None,
    summer_slots=None,
) -> SeasonCalendar:
    if winter_slots is None:
        winter_slots = [WeeklySlot(2, "20:30"), WeeklySlot(6, "21:00")]
    if summer_slots is None:
        summer_slots = [WeeklySlot(0, "19:00"), WeeklySlot(3, "19:30")]
    winter = RegimeConfig(
        name="winter",
        boundary=DateBoundary(*winter_start),
        location="Park Arena",
        slots=winter_slots,
    )
    summer = RegimeConfig(
        name="summer",
        boundary=DateBoundary(*summer_start),
        location="Beach Courts",
        slots=summer_slots,
    )
    return SeasonCalendar(winter, summer)


@pytest.fixture
def calendar():
    return make_calendar()


@pytest.fixture
def resolver(calendar):
    return SeasonResolver(calendar)


@pytest.fixture
def projector(resolver):
    return OccurrenceProjector(resolver, TZ)
