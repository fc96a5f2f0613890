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
Generated Text Sanitizer

Coerces free-form model output into text Discord's markdown renderer can
always display: single blank lines between sections, the configured location
link kept intact, and no unbalanced emphasis markers.
"""

import re

from schedule.calendar import split_location_link

EMPHASIS_DELIMITERS = ("*", "_", "`")

# Link targets are masked while delimiters are counted and stripped, so
# underscores inside URLs survive.
_LINK_TARGET = re.compile(r"\]\([^)\s]*\)")
_PLACEHOLDER = "\x00{}\x00"


def normalize_blank_lines(text: str) -> str:
    """
    Trim, drop blank lines, and rejoin with exactly one blank line.

    Idempotent: normalize_blank_lines(normalize_blank_lines(x)) == normalize_blank_lines(x)
    """
    lines = [line.strip() for line in text.strip().splitlines()]
    return "\n\n".join(line for line in lines if line)


def restore_location_link(text: str, location: str) -> str:
    """
    Put the configured hyperlink back over a bare mention of its name.

    Only applies when location is a markdown link ("[name](url)"), the text
    does not already contain that link, and the name appears as plain text.
    At most one mention is rewritten.
    """
    name, url = split_location_link(location)
    if url is None:
        return text

    link = f"[{name}]({url})"
    if link in text:
        return text

    # Word boundaries only where the name itself starts or ends with a word char
    start = r"\b" if re.match(r"\w", name) else ""
    end = r"\b" if re.search(r"\w$", name) else ""
    bare = re.compile(r"(?<!\[)" + start + re.escape(name) + end + r"(?!\]\()")
    return bare.sub(lambda _: link, text, count=1)


def _mask_link_targets(text: str) -> tuple[str, list[str]]:
    targets: list[str] = []

    def _mask(match: re.Match) -> str:
        targets.append(match.group(0))
        return _PLACEHOLDER.format(len(targets) - 1)

    return _LINK_TARGET.sub(_mask, text), targets


def _unmask_link_targets(text: str, targets: list[str]) -> str:
    for index, target in enumerate(targets):
        text = text.replace(_PLACEHOLDER.format(index), target)
    return text


def unbalanced_delimiters(text: str) -> list[str]:
    """Delimiter types that occur an odd number of times outside link targets."""
    masked, _ = _mask_link_targets(text)
    return [d for d in EMPHASIS_DELIMITERS if masked.count(d) % 2 == 1]


def strip_unbalanced_emphasis(text: str) -> str:
    """
    Remove every occurrence of each delimiter type whose count is odd.

    Balanced text is returned unchanged.
    """
    masked, targets = _mask_link_targets(text)
    for delimiter in EMPHASIS_DELIMITERS:
        if masked.count(delimiter) % 2 == 1:
            masked = masked.replace(delimiter, "")
    return _unmask_link_targets(masked, targets)


def sanitize_generated_text(text: str, location: str) -> str:
    """
    Run the full pipeline over generated text.

    1. Trim and normalize blank lines
    2. Restore the location hyperlink
    3. Strip unbalanced emphasis delimiters

    Returns:
        Sanitized text, possibly empty if nothing usable was generated
    """
    cleaned = normalize_blank_lines(text or "")
    cleaned = restore_location_link(cleaned, location)
    stripped = strip_unbalanced_emphasis(cleaned)
    if stripped != cleaned:
        # A line made only of markers ("***") is empty now
        stripped = normalize_blank_lines(stripped)
    return stripped
