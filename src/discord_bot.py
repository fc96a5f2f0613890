"""
frisbot Discord Bot

Maintains the Discord connection, arms the daily training reminder checks,
and registers the /training slash commands.
"""

import asyncio
import logging
from typing import Optional

import discord
from discord.ext import commands
from dotenv import load_dotenv

from commands.schedule_commands import ScheduleCommands
from composer import AnthropicBackend, MessageComposer
from config import BotConfig
from delivery import ChannelTransport, ReminderDispatcher
from schedule import (
    Clock,
    ConfigurationError,
    InvalidDateInput,
    OccurrenceProjector,
    ReminderTrigger,
    SeasonResolver,
)
from utils.formatters import format_date

load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("frisbot")


class DiscordBot(commands.Bot):
    """Discord bot that posts seasonal training reminders."""

    def __init__(self, config: BotConfig):
        intents = discord.Intents.default()
        intents.guilds = True

        super().__init__(command_prefix="!", intents=intents)

        self.config = config
        self.clock: Clock = config.build_clock()
        self.resolver = SeasonResolver(config.calendar)
        self.projector = OccurrenceProjector(self.resolver, self.clock.tz)
        self.composer = MessageComposer(
            self._build_backend(),
            temperature=config.generation_temperature,
            max_tokens=config.generation_max_tokens,
        )
        self.transport = ChannelTransport(self)
        self.dispatcher = ReminderDispatcher(
            calendar=config.calendar,
            composer=self.composer,
            transport=self.transport,
            reminder_channel_id=config.reminder_channel_id,
            trainer_channel_id=config.trainer_channel_id,
            use_generation=config.generation_enabled,
            trainer_enabled=config.trainer_reminders_enabled,
            trainer_use_generation=config.trainer_generation_enabled,
        )
        self.trigger = ReminderTrigger(
            self.projector,
            self.clock,
            self.dispatcher,
            wait_until_ready=self.wait_until_ready,
        )

    def _build_backend(self) -> Optional[AnthropicBackend]:
        if not self.config.anthropic_api_key:
            logger.info("No ANTHROPIC_API_KEY, reminders will use templates")
            return None
        return AnthropicBackend(
            self.config.anthropic_api_key,
            model=self.config.generation_model,
            timeout=self.config.generation_timeout_seconds,
        )

    async def setup_hook(self):
        """Called when the bot is starting up."""
        config = self.config
        logger.info(f"Setup: REMINDER_CHANNEL_ID={'set' if config.reminder_channel_id else 'missing'}")
        logger.info(f"Setup: TRAINER_CHANNEL_ID={'set' if config.trainer_channel_id else 'missing'}")
        logger.info(f"Setup: ANTHROPIC_API_KEY={'set' if config.anthropic_api_key else 'missing'}")
        logger.info(f"Setup: GENERATION_ENABLED={config.generation_enabled}")
        logger.info(f"Setup: TRAINER_REMINDERS_ENABLED={config.trainer_reminders_enabled}")
        logger.info(f"Setup: SCHEDULE_TIMEZONE={config.timezone}")

        await self.add_cog(
            ScheduleCommands(
                self,
                clock=self.clock,
                resolver=self.resolver,
                projector=self.projector,
                composer=self.composer,
                dispatcher=self.dispatcher,
                owner_id=config.owner_id,
            )
        )
        await self.tree.sync()
        self.trigger.start()

    async def on_ready(self):
        """Called when the bot has connected to Discord."""
        logger.info(f"Logged in as {self.user} (ID: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")
        self._log_schedule()

    def _log_schedule(self) -> None:
        now = self.clock.now()
        regime = self.resolver.resolve(now)
        occurrence = self.projector.next_occurrence(now)
        days = ", ".join(f"{s.day_name} at {s.time}" for s in regime.slots)
        logger.info(f"Current season: {regime.name} ({regime.location})")
        logger.info(f"Training days: {days}")
        logger.info(
            f"Next training: {occurrence.day_name}, {format_date(occurrence.date)} "
            f"at {occurrence.slot.time} ({occurrence.effective_location})"
        )

    async def close(self):
        """Clean up resources on shutdown."""
        self.trigger.stop()
        await super().close()


async def main():
    """Run the bot."""
    try:
        config = BotConfig.from_env()
    except (ConfigurationError, InvalidDateInput) as e:
        logger.error(f"Invalid configuration: {e}")
        raise SystemExit(1)

    if not config.discord_token:
        print("Error: DISCORD_BOT_TOKEN environment variable not set")
        print("Please set it in your .env file")
        return

    bot = DiscordBot(config)
    await bot.start(config.discord_token)


if __name__ == "__main__":
    asyncio.run(main())
