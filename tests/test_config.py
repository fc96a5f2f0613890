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

"""Tests for environment configuration."""

import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from composer.backend import GENERATION_MODEL
from config import BotConfig, parse_boundary, parse_practice_days
from schedule.calendar import ConfigurationError, DateBoundary, WeeklySlot
from schedule.clock import InvalidDateInput


class TestParsers:
    """Env value formats."""

    def test_parse_boundary(self):
        assert parse_boundary("9:15") == DateBoundary(9, 15)
        assert parse_boundary(" 05:20 ") == DateBoundary(5, 20)

    @pytest.mark.parametrize("value", ["9-15", "9", "a:b", "13:1", "2:30"])
    def test_parse_boundary_invalid(self, value):
        with pytest.raises(ConfigurationError):
            parse_boundary(value)

    def test_parse_practice_days(self):
        assert parse_practice_days("2:20:30, 6:21:00") == [
            WeeklySlot(2, "20:30"),
            WeeklySlot(6, "21:00"),
        ]

    def test_parse_practice_days_with_location(self):
        slots = parse_practice_days("3:19:30@[Gym](https://maps.example/gym)")
        assert slots == [WeeklySlot(3, "19:30", "[Gym](https://maps.example/gym)")]

    @pytest.mark.parametrize("value", ["7:20:30", "x:20:30", "2:25:00", "2:2030", "2"])
    def test_parse_practice_days_invalid(self, value):
        with pytest.raises(ConfigurationError):
            parse_practice_days(value)


class TestFromEnv:
    """BotConfig.from_env defaults and overrides."""

    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            config = BotConfig.from_env()
        winter = config.calendar.get("winter")
        summer = config.calendar.get("summer")
        assert winter.boundary == DateBoundary(9, 15)
        assert winter.location == "Park Arena"
        assert [s.time for s in winter.slots] == ["20:30", "21:00"]
        assert summer.boundary == DateBoundary(5, 20)
        assert [s.day_of_week for s in summer.slots] == [0, 3]
        assert config.generation_enabled is False
        assert config.timezone == "Europe/Prague"
        assert config.reminder_channel_id is None

    def test_custom_values(self):
        env = {
            "WINTER_START_DATE": "10:1",
            "WINTER_LOCATION": "  Sports Hall ",
            "WINTER_PRACTICE_DAYS": "1:19:00",
            "REMINDER_CHANNEL_ID": "123456789",
            "OWNER_ID": "42",
            "GENERATION_ENABLED": "true",
            "TRAINER_REMINDERS_ENABLED": "TRUE",
            "GENERATION_TEMPERATURE": "0.4",
            "GENERATION_MAX_TOKENS": "300",
        }
        with patch.dict("os.environ", env, clear=True):
            config = BotConfig.from_env()
        winter = config.calendar.get("winter")
        assert winter.boundary == DateBoundary(10, 1)
        assert winter.location == "Sports Hall"
        assert winter.slots == (WeeklySlot(1, "19:00"),)
        assert config.reminder_channel_id == 123456789
        assert config.owner_id == 42
        assert config.generation_enabled is True
        assert config.trainer_reminders_enabled is True
        assert config.generation_temperature == 0.4
        assert config.generation_max_tokens == 300

    def test_coincident_boundaries(self):
        env = {"WINTER_START_DATE": "6:1", "SUMMER_START_DATE": "6:1"}
        with patch.dict("os.environ", env, clear=True):
            with pytest.raises(ConfigurationError):
                BotConfig.from_env()

    def test_unknown_timezone(self):
        with patch.dict("os.environ", {"SCHEDULE_TIMEZONE": "Mars/Olympus"}, clear=True):
            with pytest.raises(ConfigurationError):
                BotConfig.from_env()

    def test_bad_channel_id(self):
        with patch.dict("os.environ", {"REMINDER_CHANNEL_ID": "general"}, clear=True):
            with pytest.raises(ConfigurationError):
                BotConfig.from_env()

    def test_test_mode_override(self):
        env = {"TEST_MODE": "true", "OVERRIDE_DATE": "2024-01-15T20:30"}
        with patch.dict("os.environ", env, clear=True):
            config = BotConfig.from_env()
        clock = config.build_clock()
        assert clock.now().replace(tzinfo=None) == datetime(2024, 1, 15, 20, 30)

    def test_override_ignored_outside_test_mode(self):
        with patch.dict("os.environ", {"OVERRIDE_DATE": "2024-01-15"}, clear=True):
            config = BotConfig.from_env()
        assert config.build_clock().is_overridden is False

    def test_malformed_override(self):
        env = {"TEST_MODE": "true", "OVERRIDE_DATE": "15/01/2024"}
        with patch.dict("os.environ", env, clear=True):
            with pytest.raises(InvalidDateInput):
                BotConfig.from_env()

    def test_model_default_follows_backend(self):
        with patch.dict("os.environ", {}, clear=True):
            config = BotConfig.from_env()
        assert config.generation_model == GENERATION_MODEL
        assert BotConfig(calendar=config.calendar).generation_model == GENERATION_MODEL
