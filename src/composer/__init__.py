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
Message Composer Package

Reminder text from templates or from Claude, with sanitization and fallback.
"""

from .backend import AnthropicBackend, GenerationBackend, GenerationFailure
from .composer import ComposedMessage, MessageComposer, SOURCE_GENERATED, SOURCE_TEMPLATE
from .sanitizer import (
    normalize_blank_lines,
    restore_location_link,
    sanitize_generated_text,
    strip_unbalanced_emphasis,
)

__all__ = [
    "AnthropicBackend",
    "GenerationBackend",
    "GenerationFailure",
    "ComposedMessage",
    "MessageComposer",
    "SOURCE_GENERATED",
    "SOURCE_TEMPLATE",
    "normalize_blank_lines",
    "restore_location_link",
    "sanitize_generated_text",
    "strip_unbalanced_emphasis",
]
