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
Message Composer Module

Builds reminder text for the group channel and the trainer channel. The
template path always works; the generation path is tried first when enabled
and falls back to the template on any failure.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from schedule.calendar import RegimeConfig, WeeklySlot, split_location_link

from .backend import GenerationBackend, GenerationFailure
from .prompts import group_prompt, group_template, trainer_prompt, trainer_template
from .sanitizer import sanitize_generated_text

logger = logging.getLogger("frisbot.composer")

SOURCE_TEMPLATE = "template"
SOURCE_GENERATED = "generated"


@dataclass(frozen=True)
class ComposedMessage:
    """Reminder text and where it came from."""

    text: str
    source: str

    def __post_init__(self):
        if not self.text or not self.text.strip():
            raise ValueError("Composed message text must not be empty")
        if self.source not in (SOURCE_TEMPLATE, SOURCE_GENERATED):
            raise ValueError(f"Unknown message source '{self.source}'")


class MessageComposer:
    """
    Composes group and trainer reminders.

    Args:
        backend: Generation backend, or None when generation is unavailable
        temperature: Sampling temperature for generation
        max_tokens: Output token limit for generation
    """

    def __init__(
        self,
        backend: Optional[GenerationBackend] = None,
        temperature: float = 0.7,
        max_tokens: int = 200,
    ):
        self.backend = backend
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def generation_available(self) -> bool:
        return self.backend is not None

    def template_message(self, regime: RegimeConfig, slot: WeeklySlot) -> str:
        return group_template(regime.effective_location(slot), slot.time)

    def trainer_template_message(self, regime: RegimeConfig, slot: WeeklySlot) -> str:
        return trainer_template(regime.effective_location(slot), slot.time)

    async def compose(
        self, regime: RegimeConfig, slot: WeeklySlot, use_generation: bool = False
    ) -> ComposedMessage:
        """Compose the group reminder for slot. Never raises on generation problems."""
        return await self._compose(
            regime,
            slot,
            use_generation,
            prompt_builder=group_prompt,
            template=self.template_message,
            kind="group",
        )

    async def compose_trainer(
        self, regime: RegimeConfig, slot: WeeklySlot, use_generation: bool = False
    ) -> ComposedMessage:
        """Compose the trainer availability request for slot."""
        return await self._compose(
            regime,
            slot,
            use_generation,
            prompt_builder=trainer_prompt,
            template=self.trainer_template_message,
            kind="trainer",
        )

    async def _compose(
        self,
        regime: RegimeConfig,
        slot: WeeklySlot,
        use_generation: bool,
        prompt_builder: Callable[[str, str, str], str],
        template: Callable[[RegimeConfig, WeeklySlot], str],
        kind: str,
    ) -> ComposedMessage:
        if use_generation and self.backend is not None:
            location = regime.effective_location(slot)
            # The prompt gets the display name; the sanitizer restores the link
            display_name, _ = split_location_link(location)
            prompt = prompt_builder(display_name, slot.time, regime.name)
            text = await self._generate(prompt, location, kind)
            if text:
                return ComposedMessage(text=text, source=SOURCE_GENERATED)
            logger.info(f"Falling back to {kind} template message")
        elif use_generation:
            logger.info(f"Generation not configured, using {kind} template message")

        return ComposedMessage(text=template(regime, slot), source=SOURCE_TEMPLATE)

    async def _generate(self, prompt: str, location: str, kind: str) -> Optional[str]:
        try:
            raw = await self.backend.generate(
                prompt, temperature=self.temperature, max_tokens=self.max_tokens
            )
            text = sanitize_generated_text(raw, location)
            if not text:
                raise GenerationFailure("Generated text is empty after sanitization")
            return text
        except GenerationFailure as e:
            logger.warning(f"Failed to generate {kind} message: {e}")
        except Exception as e:
            logger.warning(f"Unexpected error generating {kind} message: {e}", exc_info=True)
        return None
