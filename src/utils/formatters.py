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

"""Display helpers for dates, boundaries and slots."""

from datetime import date

from schedule.calendar import DateBoundary, RegimeConfig

MONTH_NAMES_SHORT = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sept", "Oct", "Nov", "Dec",
)


def format_date(day: date) -> str:
    """Jan 15, 2024"""
    return f"{MONTH_NAMES_SHORT[day.month - 1]} {day.day}, {day.year}"


def format_boundary(boundary: DateBoundary) -> str:
    """Sept 15"""
    return f"{MONTH_NAMES_SHORT[boundary.month - 1]} {boundary.day}"


def format_slots(regime: RegimeConfig) -> str:
    lines = []
    for slot in regime.slots:
        line = f"• {slot.day_name}s at {slot.time}"
        if slot.location_override:
            line += f" ({slot.location_override})"
        lines.append(line)
    return "\n".join(lines) if lines else "No practice days configured"


def capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]
