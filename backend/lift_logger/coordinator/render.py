"""User-facing text for coordinator outcomes."""

from typing import Optional

from lift_logger.models.backend import ChecklistItem, Target

NO_ACTIVE_SESSION = "⚠️ No active session. Use /session_start first."
NO_TARGETS = "No targets yet. Log freely."
SESSION_ENDED = "Session ended."
PLAN_FORM_PROMPT = "📋 Paste your plan (BOT_MESSAGE block), or send 'skip' to start without one."


def format_number(value: Optional[float]) -> str:
    """Format a weight or rep count, ``?`` when missing, no trailing ``.0``."""
    if value is None:
        return "?"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def checklist_lines(items: list[ChecklistItem]) -> list[str]:
    return [
        f"{idx}) {item.exercise} - Target: "
        f"{format_number(item.target_weight)}×{format_number(item.target_reps)}"
        for idx, item in enumerate(items, start=1)
    ]


def session_started(session_id: str, checklist: list[ChecklistItem]) -> str:
    lines = checklist_lines(checklist)
    body = "\n".join(lines) if lines else NO_TARGETS
    return f"🟢 Session started: {session_id}\n🔥 SESSION CHECKLIST\n{body}"


def next_target_hint(target: Optional[Target]) -> str:
    if not target or not target.target_weight or not target.target_reps:
        return ""
    return (
        f" • Next target: {format_number(target.target_weight)}"
        f"×{format_number(target.target_reps)}"
    )


def set_logged(
    exercise: str,
    weight: float,
    reps: int,
    notes: str = "",
    next_target: Optional[Target] = None,
) -> str:
    note_part = f" ({notes})" if notes else ""
    return (
        f"✅ Logged: {exercise} - {format_number(weight)}×{format_number(reps)}"
        f"{note_part}{next_target_hint(next_target)}"
    )


def session_ended(summary_text: str) -> str:
    return summary_text if summary_text.strip() else SESSION_ENDED


def command_error(command: str, message: str) -> str:
    return f"❌ {command} error: {message}"
