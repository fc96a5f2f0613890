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
Reminder Delivery

Discord channel transport and the dispatcher that turns a due training
session into sent reminders. Delivery failures are logged and dropped.
"""

import logging
from typing import Optional

import discord
from discord.ext import commands

from composer import ComposedMessage, MessageComposer
from schedule.calendar import ResolvedOccurrence, SeasonCalendar

logger = logging.getLogger("frisbot.delivery")

# Discord message length limit
DISCORD_MAX_LENGTH = 2000


class TransportError(Exception):
    """Raised when a message cannot be delivered to its destination."""

    pass


class ChannelTransport:
    """Sends text to Discord channels by ID."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    async def send(self, channel_id: int, text: str, markdown: bool = True) -> discord.Message:
        """
        Send text to a channel.

        Args:
            channel_id: Destination channel ID
            text: Message content
            markdown: When False, markdown characters are escaped

        Raises:
            TransportError: If the channel is missing or unreachable, or Discord rejects the message
        """
        if not markdown:
            text = discord.utils.escape_markdown(text)
        if len(text) > DISCORD_MAX_LENGTH:
            text = text[: DISCORD_MAX_LENGTH - 20] + "\n\n[...truncated]"

        try:
            channel = self.bot.get_channel(channel_id)
            if channel is None:
                channel = await self.bot.fetch_channel(channel_id)
            return await channel.send(text)
        except discord.NotFound as e:
            raise TransportError(f"Channel {channel_id} not found") from e
        except discord.Forbidden as e:
            raise TransportError(f"No access to channel {channel_id}") from e
        except discord.HTTPException as e:
            raise TransportError(f"Discord rejected message to {channel_id}: {e}") from e


class ReminderDispatcher:
    """
    Composes and sends the reminders for a training session.

    The group reminder goes to the reminder channel; when enabled, the
    trainer availability request goes to the trainer channel.
    """

    def __init__(
        self,
        calendar: SeasonCalendar,
        composer: MessageComposer,
        transport: ChannelTransport,
        reminder_channel_id: Optional[int] = None,
        trainer_channel_id: Optional[int] = None,
        use_generation: bool = False,
        trainer_enabled: bool = False,
        trainer_use_generation: bool = False,
    ):
        self.calendar = calendar
        self.composer = composer
        self.transport = transport
        self.reminder_channel_id = reminder_channel_id
        self.trainer_channel_id = trainer_channel_id
        self.use_generation = use_generation
        self.trainer_enabled = trainer_enabled
        self.trainer_use_generation = trainer_use_generation

    async def __call__(self, occurrence: ResolvedOccurrence) -> None:
        await self.dispatch(occurrence)

    async def dispatch(self, occurrence: ResolvedOccurrence) -> None:
        regime = self.calendar.get(occurrence.regime_name)

        message = await self.composer.compose(
            regime, occurrence.slot, use_generation=self.use_generation
        )
        await self._deliver(self.reminder_channel_id, message, "group", occurrence)

        if self.trainer_enabled:
            trainer_message = await self.composer.compose_trainer(
                regime, occurrence.slot, use_generation=self.trainer_use_generation
            )
            await self._deliver(self.trainer_channel_id, trainer_message, "trainer", occurrence)

    async def _deliver(
        self,
        channel_id: Optional[int],
        message: ComposedMessage,
        kind: str,
        occurrence: ResolvedOccurrence,
    ) -> bool:
        if channel_id is None:
            logger.warning(f"No channel configured for {kind} reminder. Message would be:\n{message.text}")
            return False

        try:
            await self.transport.send(channel_id, message.text, markdown=True)
        except TransportError as e:
            logger.error(f"Failed to deliver {kind} reminder to {channel_id}: {e}")
            return False

        logger.info(
            f"Delivered {kind} reminder to channel {channel_id} "
            f"(season={occurrence.regime_name}, date={occurrence.date}, "
            f"time={occurrence.slot.time}, source={message.source})"
        )
        return True
