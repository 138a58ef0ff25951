"""Argument parsing for Telegram commands."""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from telegram import Update

LOG_USAGE = (
    "Usage: /log <exercise> <weight> <reps> [notes]\n"
    "Example: /log Bench Press 100 5 felt easy"
)


class CommandArgumentError(ValueError):
    """Command arguments could not be parsed; the message is shown to the user."""


@dataclass(frozen=True)
class LogArgs:
    exercise: str
    weight: float
    reps: int
    notes: str = ""


def _as_weight(token: str) -> Optional[float]:
    try:
        value = float(token.replace(",", "."))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _as_reps(token: str) -> Optional[int]:
    return int(token) if token.isdigit() else None


def _is_number(token: str) -> bool:
    return _as_weight(token) is not None


def parse_log_args(args: Sequence[str]) -> LogArgs:
    """Split ``/log`` arguments into exercise, weight, reps and notes.

    Exercise names may contain spaces and numbers, so the name runs up to
    the first ``<number> <integer>`` pair whose notes do not start with
    another number: ``Row 2 100 5`` is "Row 2" at 100×5, while
    ``Squat 140 3 RPE 8`` is "Squat" at 140×3 with notes "RPE 8".

    Raises:
        CommandArgumentError: No exercise name or no weight/reps pair.
    """
    tokens = [t for t in args if t]
    pairs = [
        i
        for i in range(1, len(tokens) - 1)
        if _as_weight(tokens[i]) is not None and _as_reps(tokens[i + 1]) is not None
    ]
    if not pairs:
        raise CommandArgumentError(LOG_USAGE)

    split = next(
        (i for i in pairs if i + 2 >= len(tokens) or not _is_number(tokens[i + 2])),
        pairs[0],
    )
    return LogArgs(
        exercise=" ".join(tokens[:split]),
        weight=_as_weight(tokens[split]),
        reps=_as_reps(tokens[split + 1]),
        notes=" ".join(tokens[split + 2 :]),
    )


def plan_text_from(message_text: Optional[str]) -> str:
    """Text after the command word, keeping line breaks (plans are multi-line)."""
    if not message_text:
        return ""
    parts = message_text.split(maxsplit=1)
    if not parts or not parts[0].startswith("/"):
        return message_text.strip()
    return parts[1].strip() if len(parts) > 1 else ""


def channel_key(update: Update) -> str:
    """Conversation channel id: the chat, plus the forum topic if any."""
    chat_id = str(update.effective_chat.id)
    message = update.effective_message
    thread_id = getattr(message, "message_thread_id", None) if message else None
    if thread_id and getattr(message, "is_topic_message", False):
        return f"{chat_id}:{thread_id}"
    return chat_id
