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
Generation Backend

Thin wrapper over the Anthropic Messages API used to write reminder text.
Every non-success outcome is reported as GenerationFailure.
"""

import logging
from typing import Optional

import anthropic
from anthropic import AsyncAnthropic

logger = logging.getLogger("frisbot.composer.backend")

# Model for reminder message generation
GENERATION_MODEL = "claude-sonnet-4-6"


class GenerationFailure(Exception):
    """Raised when the backend errors, times out, or returns no text."""

    pass


class GenerationBackend:
    """Interface for text generation backends."""

    async def generate(
        self, prompt: str, *, temperature: float = 0.7, max_tokens: int = 200
    ) -> str:
        raise NotImplementedError


class AnthropicBackend(GenerationBackend):
    """Generates text with Claude."""

    def __init__(
        self,
        api_key: str,
        model: str = GENERATION_MODEL,
        timeout: float = 30.0,
        client: Optional[AsyncAnthropic] = None,
    ):
        self.model = model
        self.client = client or AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0)

    async def generate(
        self, prompt: str, *, temperature: float = 0.7, max_tokens: int = 200
    ) -> str:
        """
        Submit a single-turn prompt.

        Returns:
            The stripped response text

        Raises:
            GenerationFailure: On API errors, timeouts, or an empty response
        """
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APITimeoutError as e:
            raise GenerationFailure(f"Generation timed out: {e}") from e
        except anthropic.APIError as e:
            raise GenerationFailure(f"Generation API error: {e}") from e

        text = "".join(
            block.text for block in response.content if block.type == "text"
        ).strip()
        if not text:
            raise GenerationFailure("Empty response from generation backend")

        logger.debug(f"Generated {len(text)} chars with {self.model}")
        return text
