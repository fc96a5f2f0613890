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
Bot Configuration

Settings for the reminder bot and the season calendar.
Values can be overridden via environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from composer.backend import GENERATION_MODEL
from schedule.calendar import (
    ConfigurationError,
    DateBoundary,
    RegimeConfig,
    SeasonCalendar,
    WeeklySlot,
)
from schedule.clock import Clock, validate_timezone

logger = logging.getLogger("frisbot.config")

DEFAULT_WINTER_START = "9:15"
DEFAULT_WINTER_LOCATION = "Park Arena"
DEFAULT_WINTER_PRACTICES = "2:20:30,6:21:00"
DEFAULT_SUMMER_START = "5:20"
DEFAULT_SUMMER_LOCATION = "Beach Courts"
DEFAULT_SUMMER_PRACTICES = "0:19:00,3:19:30"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a numeric Discord ID, got '{value}'")


def _env_number(name: str, default: str, cast):
    value = os.getenv(name, default).strip()
    try:
        return cast(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got '{value}'")


def parse_boundary(value: str, setting: str = "start date") -> DateBoundary:
    """
    Parse a "month:day" boundary such as "9:15".

    Raises:
        ConfigurationError: If the value is malformed or not a calendar date
    """
    parts = value.strip().split(":")
    if len(parts) != 2:
        raise ConfigurationError(f"{setting} must be in format MONTH:DAY, got '{value}'")
    try:
        month, day = int(parts[0]), int(parts[1])
    except ValueError:
        raise ConfigurationError(f"{setting} must be in format MONTH:DAY, got '{value}'")
    return DateBoundary(month=month, day=day)


def parse_practice_days(value: str, setting: str = "practice days") -> list[WeeklySlot]:
    """
    Parse comma separated slots "DAY:HH:MM[@location]".

    Example: "2:20:30,6:21:00@[Gym](https://maps.example/gym)"

    Raises:
        ConfigurationError: If any entry is malformed
    """
    slots = []
    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue

        location = None
        if "@" in entry:
            entry, location = entry.split("@", 1)
            location = location.strip() or None

        day_part, _, time_part = entry.strip().partition(":")
        try:
            day = int(day_part)
        except ValueError:
            raise ConfigurationError(
                f"{setting}: entry '{entry}' must start with a weekday number (0=Sunday)"
            )
        slots.append(WeeklySlot(day_of_week=day, time=time_part, location_override=location))
    return slots


@dataclass
class BotConfig:
    """Configuration for the reminder bot."""

    calendar: SeasonCalendar

    # Discord
    discord_token: Optional[str] = None
    reminder_channel_id: Optional[int] = None
    trainer_channel_id: Optional[int] = None
    owner_id: Optional[int] = None

    # Generation (Anthropic)
    anthropic_api_key: Optional[str] = None
    generation_enabled: bool = False
    trainer_reminders_enabled: bool = False
    trainer_generation_enabled: bool = False
    generation_model: str = GENERATION_MODEL
    generation_temperature: float = 0.7
    generation_max_tokens: int = 200
    generation_timeout_seconds: float = 30.0

    # Time
    timezone: str = "Europe/Prague"
    test_mode: bool = False
    override_date: Optional[str] = None

    @classmethod
    def from_env(cls) -> "BotConfig":
        """
        Create config from environment variables with defaults.

        Raises:
            ConfigurationError: If a value is malformed or the calendar is invalid
            InvalidDateInput: If test mode is on with a malformed OVERRIDE_DATE
        """
        winter = RegimeConfig(
            name="winter",
            boundary=parse_boundary(
                os.getenv("WINTER_START_DATE") or DEFAULT_WINTER_START, "WINTER_START_DATE"
            ),
            location=(os.getenv("WINTER_LOCATION") or DEFAULT_WINTER_LOCATION).strip(),
            slots=parse_practice_days(
                os.getenv("WINTER_PRACTICE_DAYS") or DEFAULT_WINTER_PRACTICES,
                "WINTER_PRACTICE_DAYS",
            ),
        )
        summer = RegimeConfig(
            name="summer",
            boundary=parse_boundary(
                os.getenv("SUMMER_START_DATE") or DEFAULT_SUMMER_START, "SUMMER_START_DATE"
            ),
            location=(os.getenv("SUMMER_LOCATION") or DEFAULT_SUMMER_LOCATION).strip(),
            slots=parse_practice_days(
                os.getenv("SUMMER_PRACTICE_DAYS") or DEFAULT_SUMMER_PRACTICES,
                "SUMMER_PRACTICE_DAYS",
            ),
        )

        config = cls(
            calendar=SeasonCalendar(winter, summer),
            discord_token=os.getenv("DISCORD_BOT_TOKEN"),
            reminder_channel_id=_env_int("REMINDER_CHANNEL_ID"),
            trainer_channel_id=_env_int("TRAINER_CHANNEL_ID"),
            owner_id=_env_int("OWNER_ID"),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            generation_enabled=_env_flag("GENERATION_ENABLED"),
            trainer_reminders_enabled=_env_flag("TRAINER_REMINDERS_ENABLED"),
            trainer_generation_enabled=_env_flag("TRAINER_GENERATION_ENABLED"),
            generation_model=os.getenv("GENERATION_MODEL", GENERATION_MODEL),
            generation_temperature=_env_number("GENERATION_TEMPERATURE", "0.7", float),
            generation_max_tokens=_env_number("GENERATION_MAX_TOKENS", "200", int),
            generation_timeout_seconds=_env_number("GENERATION_TIMEOUT_SECONDS", "30", float),
            timezone=os.getenv("SCHEDULE_TIMEZONE", "Europe/Prague"),
            test_mode=_env_flag("TEST_MODE"),
            override_date=os.getenv("OVERRIDE_DATE") or None,
        )
        config.validate()
        return config

    def validate(self) -> None:
        """
        Check settings the engine cannot run without.

        Raises:
            ConfigurationError: On a fatal problem
            InvalidDateInput: On a malformed test-mode override date
        """
        self.calendar.require_slots()

        if not validate_timezone(self.timezone):
            raise ConfigurationError(f"Unknown SCHEDULE_TIMEZONE '{self.timezone}'")

        # Parses the override so a bad date fails at startup
        self.build_clock()

        if self.reminder_channel_id is None:
            logger.warning(
                "REMINDER_CHANNEL_ID not set - scheduled reminders will be logged but not sent"
            )
        if self.trainer_reminders_enabled and self.trainer_channel_id is None:
            logger.warning("TRAINER_REMINDERS_ENABLED but TRAINER_CHANNEL_ID is not set")
        if (self.generation_enabled or self.trainer_generation_enabled) and not self.anthropic_api_key:
            logger.warning("Generation enabled but ANTHROPIC_API_KEY missing - using templates")

    def build_clock(self) -> Clock:
        return Clock.from_settings(self.timezone, self.test_mode, self.override_date)
