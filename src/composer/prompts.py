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
Reminder Templates and Prompts

Deterministic reminder templates and the instructions given to the
generation backend for the group and trainer reminders.
"""

EMOJIS = {
    "FRISBEE": "🥏",
    "ROCKET": "🚀",
    "BULB": "💡",
    "CALENDAR": "📅",
    "LOCATION": "📍",
    "CLOCK": "⏰",
    "MEMO": "📝",
    "ROBOT": "🤖",
    "TEST_TUBE": "🧪",
    "CHECK_MARK": "✅",
    "CROSS_MARK": "❌",
    "WINTER": "🏔️",
    "SUMMER": "🏖️",
    "RUNNER": "🏃",
    "THUMBS_UP": "👍",
    "RAISED_HAND": "🙋",
    "WHISTLE": "📣",
}

# The only emojis generated messages may use
ALLOWED_EMOJIS = ("🥏", "🚀", "💡", "🔥", "💪", "🏃", "☀️", "❄️", "👍")
TRAINER_ALLOWED_EMOJIS = ("🥏", "📣", "💡", "📋", "🙋")

# Reactions people use to answer
CONFIRM_REACTION = EMOJIS["THUMBS_UP"]
TRAINER_CONFIRM_REACTION = EMOJIS["RAISED_HAND"]


def group_template(location: str, time: str) -> str:
    return (
        f"{EMOJIS['ROCKET']} Hey team!\n\n"
        f"Tomorrow we're planning an Ultimate Frisbee training at {location} "
        f"starting at {time}.\n\n"
        f"{EMOJIS['BULB']} If you're in, just drop a {CONFIRM_REACTION} on this message "
        f"so we know how many are coming.\n"
        f"The more the merrier! {EMOJIS['FRISBEE']}"
    )


def trainer_template(location: str, time: str) -> str:
    return (
        f"{EMOJIS['WHISTLE']} Hi coaches!\n\n"
        f"Tomorrow's Ultimate Frisbee training is at {location}, starting at {time}.\n\n"
        f"{EMOJIS['BULB']} Who can lead the session? React with {TRAINER_CONFIRM_REACTION} "
        f"if you're available.\n"
        f"Thanks for keeping the team running! {EMOJIS['FRISBEE']}"
    )


def group_prompt(location: str, time: str, season: str) -> str:
    return f"""You are writing a message for an Ultimate Frisbee group to invite people to tomorrow's training session.

Context:
- Season: {season}
- Location: {location}
- Starting time: {time}

Structure (exactly three sections, separated by exactly one blank line):
1. A greeting with the location ({location}) and starting time ({time})
2. A request to react with {CONFIRM_REACTION} to confirm attendance
3. A short, fun closing catch-phrase (like "The more the merrier!")

Rules:
- Use only these emojis, 2-4 in total: {" ".join(ALLOWED_EMOJIS)}
- {CONFIRM_REACTION} is the only way to confirm; do not ask for replies or other reactions
- Keep it casual and motivating but not cringe or overly cheesy
- Keep each section to one or two short lines
- Output ONLY the message, no introduction, notes or quotes"""


def trainer_prompt(location: str, time: str, season: str) -> str:
    return f"""You are writing a message to the coaches of an Ultimate Frisbee group, asking who can lead tomorrow's training session.

Context:
- Season: {season}
- Location: {location}
- Starting time: {time}

Structure (exactly three sections, separated by exactly one blank line):
1. A greeting with the location ({location}) and starting time ({time})
2. A request to react with {TRAINER_CONFIRM_REACTION} if they are available to lead the session
3. A short closing line thanking the coaches

Rules:
- Use only these emojis, 1-3 in total: {" ".join(TRAINER_ALLOWED_EMOJIS)}
- {TRAINER_CONFIRM_REACTION} is the only way to confirm; do not ask for replies or other reactions
- Keep it friendly and brief
- Output ONLY the message, no introduction, notes or quotes"""
