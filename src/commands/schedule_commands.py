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
Training Slash Commands

Discord slash commands for inspecting the training schedule and previewing
reminders.
"""

import logging
from datetime import timedelta
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from composer import MessageComposer
from composer.prompts import EMOJIS
from delivery import ReminderDispatcher
from schedule import Clock, InvalidDateInput, OccurrenceProjector, SeasonResolver
from schedule.clock import DATE_FORMAT_HELP
from utils.formatters import capitalize, format_boundary, format_date, format_slots

logger = logging.getLogger("frisbot.commands.schedule")


class ScheduleCommands(commands.Cog):
    """
    Slash commands for the training schedule.

    Commands:
    - /training info - Current season, location and practice days
    - /training next - Next training session
    - /training preview - Preview the reminder for the next session
    - /training simulate - Evaluate the schedule on another date (admin only)
    - /training send_now - Send the reminder for the next session now (admin only)
    """

    training_group = app_commands.Group(
        name="training",
        description="Ultimate Frisbee training schedule",
    )

    def __init__(
        self,
        bot: commands.Bot,
        clock: Clock,
        resolver: SeasonResolver,
        projector: OccurrenceProjector,
        composer: MessageComposer,
        dispatcher: ReminderDispatcher,
        owner_id: Optional[int] = None,
    ):
        self.bot = bot
        self.clock = clock
        self.resolver = resolver
        self.projector = projector
        self.composer = composer
        self.dispatcher = dispatcher
        self.owner_id = owner_id

    def _is_owner(self, interaction: discord.Interaction) -> bool:
        return self.owner_id is not None and interaction.user.id == self.owner_id

    # =========================================================================
    # /training info
    # =========================================================================

    @training_group.command(name="info")
    async def info(self, interaction: discord.Interaction):
        """Show the current season and practice days."""
        now = self.clock.now()
        regime = self.resolver.resolve(now)
        season_emoji = EMOJIS["WINTER"] if regime.name == "winter" else EMOJIS["SUMMER"]

        embed = discord.Embed(
            title=f"{season_emoji} {capitalize(regime.name)} season",
            color=discord.Color.blue(),
        )
        embed.add_field(name="Location", value=regime.location, inline=False)
        embed.add_field(name="Practice days", value=format_slots(regime), inline=False)
        embed.add_field(
            name="Season started",
            value=format_date(self.resolver.season_start(now)),
            inline=True,
        )
        embed.add_field(
            name="Reminders",
            value="Sent the day before, at practice time",
            inline=True,
        )
        for other in self.resolver.calendar.regimes:
            if other.name != regime.name:
                embed.set_footer(
                    text=f"{capitalize(other.name)} starts {format_boundary(other.boundary)}"
                )

        await interaction.response.send_message(embed=embed, ephemeral=True)

    # =========================================================================
    # /training next
    # =========================================================================

    @training_group.command(name="next")
    async def next_training(self, interaction: discord.Interaction):
        """Show the next training session."""
        occurrence = self.projector.next_occurrence(self.clock.now())

        embed = discord.Embed(
            title=f"{EMOJIS['RUNNER']} Next training",
            color=discord.Color.green(),
        )
        embed.add_field(
            name="Date",
            value=f"{occurrence.day_name}, {format_date(occurrence.date)}",
            inline=True,
        )
        embed.add_field(name="Time", value=occurrence.slot.time, inline=True)
        embed.add_field(name="Location", value=occurrence.effective_location, inline=False)
        embed.set_footer(text=f"{capitalize(occurrence.regime_name)} season")

        await interaction.response.send_message(embed=embed, ephemeral=True)

    # =========================================================================
    # /training preview
    # =========================================================================

    @training_group.command(name="preview")
    @app_commands.describe(
        generated="Try the generated message instead of the template (default: false)",
        trainer="Preview the trainer availability request (default: false)",
    )
    async def preview(
        self,
        interaction: discord.Interaction,
        generated: bool = False,
        trainer: bool = False,
    ):
        """Preview the reminder for the next training session."""
        await interaction.response.defer(ephemeral=True)

        occurrence = self.projector.next_occurrence(self.clock.now())
        regime = self.resolver.calendar.get(occurrence.regime_name)
        if trainer:
            message = await self.composer.compose_trainer(
                regime, occurrence.slot, use_generation=generated
            )
        else:
            message = await self.composer.compose(
                regime, occurrence.slot, use_generation=generated
            )

        label = f"{EMOJIS['ROBOT']} Generated" if message.source == "generated" else f"{EMOJIS['MEMO']} Template"
        await interaction.followup.send(
            f"{label} message for {occurrence.day_name}, {format_date(occurrence.date)}:\n\n{message.text}",
            ephemeral=True,
        )

    # =========================================================================
    # /training simulate
    # =========================================================================

    @training_group.command(name="simulate")
    @app_commands.describe(date="Date to evaluate, YYYY-MM-DD or YYYY-MM-DDTHH:MM")
    async def simulate(self, interaction: discord.Interaction, date: str):
        """Evaluate the schedule as if today were another date (admin only)."""
        if not self._is_owner(interaction):
            await interaction.response.send_message(
                f"{EMOJIS['CROSS_MARK']} This command can only be used by the bot admin.",
                ephemeral=True,
            )
            return

        try:
            clock = self.clock.with_override(date)
        except InvalidDateInput as e:
            await interaction.response.send_message(
                f"{EMOJIS['CROSS_MARK']} Error: {e}", ephemeral=True
            )
            return

        now = clock.now()
        regime = self.resolver.resolve(now)
        tomorrow = now.date() + timedelta(days=1)
        slot = self.projector.has_occurrence_on(tomorrow)
        occurrence = self.projector.next_occurrence(now)

        lines = [
            f"{EMOJIS['TEST_TUBE']} Results for {format_date(now.date())}:",
            "",
            f"{EMOJIS['CALENDAR']} Season: {capitalize(regime.name)}",
            f"{EMOJIS['LOCATION']} Location: {regime.location}",
            f"{EMOJIS['MEMO']} Reminder today: "
            + (
                f"{EMOJIS['CHECK_MARK']} Yes, at {slot.time}"
                if slot
                else f"{EMOJIS['CROSS_MARK']} No"
            ),
            f"{EMOJIS['RUNNER']} Next training: {occurrence.day_name}, "
            f"{format_date(occurrence.date)} at {occurrence.slot.time}",
        ]
        if slot:
            tomorrow_regime = self.resolver.resolve(tomorrow)
            lines.extend([
                "",
                "Message that would be sent:",
                "",
                self.composer.template_message(tomorrow_regime, slot),
            ])

        logger.info(f"Simulated schedule for {now.isoformat()} by {interaction.user.id}")
        await interaction.response.send_message("\n".join(lines), ephemeral=True)

    # =========================================================================
    # /training send_now
    # =========================================================================

    @training_group.command(name="send_now")
    async def send_now(self, interaction: discord.Interaction):
        """Send the reminder for the next training session now (admin only)."""
        if not self._is_owner(interaction):
            await interaction.response.send_message(
                f"{EMOJIS['CROSS_MARK']} This command can only be used by the bot admin.",
                ephemeral=True,
            )
            return

        await interaction.response.defer(ephemeral=True)
        occurrence = self.projector.next_occurrence(self.clock.now())
        await self.dispatcher.dispatch(occurrence)
        await interaction.followup.send(
            f"{EMOJIS['CHECK_MARK']} Reminder sent for {occurrence.day_name}, "
            f"{format_date(occurrence.date)}.",
            ephemeral=True,
        )
