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

"""Tests for the /training slash commands."""

import sys
from datetime import date, datetime
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from commands.schedule_commands import ScheduleCommands
from composer import MessageComposer
from conftest import TZ, make_calendar
from schedule.clock import Clock
from schedule.projector import OccurrenceProjector
from schedule.resolver import SeasonResolver

OWNER_ID = 42


def make_interaction(user_id=OWNER_ID):
    interaction = MagicMock()
    interaction.user.id = user_id
    interaction.response.send_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.followup.send = AsyncMock()
    return interaction


def make_cog(backend=None, now=datetime(2024, 1, 15, 12, 0)):
    calendar = make_calendar()
    resolver = SeasonResolver(calendar)
    dispatcher = MagicMock()
    dispatcher.dispatch = AsyncMock()
    return ScheduleCommands(
        MagicMock(),
        clock=Clock(TZ, now),
        resolver=resolver,
        projector=OccurrenceProjector(resolver, TZ),
        composer=MessageComposer(backend),
        dispatcher=dispatcher,
        owner_id=OWNER_ID,
    )


def sent_text(interaction):
    return interaction.response.send_message.await_args.args[0]


class TestInfo:
    @pytest.mark.asyncio
    async def test_info_shows_current_season(self):
        cog, interaction = make_cog(), make_interaction(user_id=7)
        await ScheduleCommands.info.callback(cog, interaction)

        kwargs = interaction.response.send_message.await_args.kwargs
        embed = kwargs["embed"]
        assert "Winter season" in embed.title
        assert embed.fields[0].value == "Park Arena"
        assert "Tuesdays at 20:30" in embed.fields[1].value
        assert "Summer starts May 20" in embed.footer.text
        assert kwargs["ephemeral"] is True

    @pytest.mark.asyncio
    async def test_next_training(self):
        cog, interaction = make_cog(), make_interaction(user_id=7)
        await ScheduleCommands.next_training.callback(cog, interaction)

        embed = interaction.response.send_message.await_args.kwargs["embed"]
        assert embed.fields[0].value == "Tuesday, Jan 16, 2024"
        assert embed.fields[1].value == "20:30"


class TestPreview:
    @pytest.mark.asyncio
    async def test_group_template(self):
        cog, interaction = make_cog(), make_interaction(user_id=7)
        await ScheduleCommands.preview.callback(cog, interaction)

        interaction.response.defer.assert_awaited_once()
        text = interaction.followup.send.await_args.args[0]
        assert "Template message for Tuesday, Jan 16, 2024" in text
        assert "👍" in text

    @pytest.mark.asyncio
    async def test_trainer_template(self):
        cog, interaction = make_cog(), make_interaction(user_id=7)
        await ScheduleCommands.preview.callback(cog, interaction, trainer=True)

        text = interaction.followup.send.await_args.args[0]
        assert "Template" in text
        assert "🙋" in text

    @pytest.mark.asyncio
    async def test_generated(self):
        backend = MagicMock()
        backend.generate = AsyncMock(return_value="Hey team!\n\nReact with 👍\n\nSee you!")
        cog, interaction = make_cog(backend), make_interaction(user_id=7)
        await ScheduleCommands.preview.callback(cog, interaction, generated=True)

        text = interaction.followup.send.await_args.args[0]
        assert "Generated message" in text
        assert "Hey team!" in text

    @pytest.mark.asyncio
    async def test_generated_failure_shows_template(self):
        backend = MagicMock()
        backend.generate = AsyncMock(side_effect=RuntimeError("down"))
        cog, interaction = make_cog(backend), make_interaction(user_id=7)
        await ScheduleCommands.preview.callback(cog, interaction, generated=True)

        assert "Template message" in interaction.followup.send.await_args.args[0]


class TestSimulate:
    @pytest.mark.asyncio
    async def test_non_owner_refused(self):
        cog, interaction = make_cog(), make_interaction(user_id=7)
        await ScheduleCommands.simulate.callback(cog, interaction, "2024-01-15")

        text = sent_text(interaction)
        assert text.startswith("❌")
        assert "admin" in text

    @pytest.mark.asyncio
    async def test_no_owner_configured_refuses_everyone(self):
        cog, interaction = make_cog(), make_interaction()
        cog.owner_id = None
        await ScheduleCommands.simulate.callback(cog, interaction, "2024-01-15")
        assert sent_text(interaction).startswith("❌")

    @pytest.mark.asyncio
    async def test_malformed_date_reported(self):
        cog, interaction = make_cog(), make_interaction()
        await ScheduleCommands.simulate.callback(cog, interaction, "15/01/2024")

        text = sent_text(interaction)
        assert text.startswith("❌ Error:")
        assert "YYYY-MM-DD" in text

    @pytest.mark.asyncio
    async def test_eve_of_training(self):
        cog, interaction = make_cog(), make_interaction()
        await ScheduleCommands.simulate.callback(cog, interaction, "2024-01-15")

        text = sent_text(interaction)
        assert "Season: Winter" in text
        assert "Yes, at 20:30" in text
        assert "Message that would be sent:" in text
        assert "Park Arena" in text

    @pytest.mark.asyncio
    async def test_day_without_reminder(self):
        cog, interaction = make_cog(), make_interaction()
        await ScheduleCommands.simulate.callback(cog, interaction, "2024-07-01")

        text = sent_text(interaction)
        assert "Season: Summer" in text
        assert "Reminder today: ❌ No" in text
        assert "Message that would be sent:" not in text
        # Simulation does not move the real clock
        assert cog.clock.today() == date(2024, 1, 15)


class TestSendNow:
    @pytest.mark.asyncio
    async def test_non_owner_refused(self):
        cog, interaction = make_cog(), make_interaction(user_id=7)
        await ScheduleCommands.send_now.callback(cog, interaction)

        assert sent_text(interaction).startswith("❌")
        cog.dispatcher.dispatch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owner_dispatches_next_occurrence(self):
        cog, interaction = make_cog(), make_interaction()
        await ScheduleCommands.send_now.callback(cog, interaction)

        occurrence = cog.dispatcher.dispatch.await_args.args[0]
        assert occurrence.date == date(2024, 1, 16)
        assert "Reminder sent for Tuesday, Jan 16, 2024" in interaction.followup.send.await_args.args[0]
