"""Command coordinator: the per-channel session state machine.

Each channel is either without a session or has exactly one active session::

    NoSession --start--> SessionActive --log--> SessionActive
    SessionActive --end--> NoSession

``start_session``/``log_set``/``end_session`` perform the transitions and
raise on failure, leaving the channel's state untouched. The ``handle_*``
wrappers turn outcomes and expected failures into ``Reply`` render
instructions for the chat layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from lift_logger.catalog.cache import ExerciseCatalog
from lift_logger.catalog.ranker import MAX_SUGGESTIONS, rank
from lift_logger.coordinator import render
from lift_logger.errors import BackendRejected, LiftLoggerError, NoActiveSession
from lift_logger.models.backend import (
    ChecklistItem,
    LogSetReply,
    SessionEndReply,
    SessionStartReply,
    Target,
)
from lift_logger.models.replies import Reply
from lift_logger.sessions.store import SessionStore

if TYPE_CHECKING:
    from lift_logger.backend.client import BackendClient

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
ResultT = TypeVar("ResultT")


@dataclass
class SessionStarted:
    session_id: str
    checklist: list[ChecklistItem] = field(default_factory=list)
    dropped: list[str] = field(default_factory=list)


@dataclass
class SetLogged:
    session_id: str
    exercise: str
    weight: float
    reps: int
    notes: str = ""
    next_target: Optional[Target] = None


@dataclass
class SessionEnded:
    session_id: str
    summary_text: str = ""


def _parse_reply(model: type[ModelT], operation: str, data: dict) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.warning("Malformed %s reply: %s", operation, exc)
        raise BackendRejected(f"malformed {operation} reply") from exc


def filter_checklist(
    items: Sequence[ChecklistItem], catalog: Sequence[str]
) -> tuple[list[ChecklistItem], list[str]]:
    """Keep checklist rows whose exercise is in the canonical catalog.

    Matching ignores case and surrounding whitespace; kept rows use the
    catalog's spelling.

    Returns:
        ``(kept, dropped_exercise_names)``
    """
    canonical = {name.strip().lower(): name for name in catalog}
    kept: list[ChecklistItem] = []
    dropped: list[str] = []
    for item in items:
        name = canonical.get(item.exercise.strip().lower())
        if name is None:
            dropped.append(item.exercise)
            continue
        kept.append(item.model_copy(update={"exercise": name}))
    return kept, dropped


class CommandCoordinator:
    """Combines the session store, backend client and exercise catalog."""

    def __init__(
        self,
        client: BackendClient,
        catalog: ExerciseCatalog,
        sessions: SessionStore,
    ) -> None:
        self.client = client
        self.catalog = catalog
        self.sessions = sessions

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def start_session(self, channel_id: str, plan_text: str = "") -> SessionStarted:
        """Open a session for ``channel_id``, superseding any existing one."""
        data = await self.client.submit(
            "session_start", {"maybe_plan_text": plan_text or ""}
        )
        reply = _parse_reply(SessionStartReply, "session_start", data)

        self.sessions.start(channel_id, reply.session_id)

        checklist, dropped = filter_checklist(
            reply.checklist, self.catalog.current_names()
        )
        if dropped:
            logger.info(
                "Channel %s: hid %d checklist rows not in catalog: %s",
                channel_id,
                len(dropped),
                ", ".join(dropped),
            )
        return SessionStarted(
            session_id=reply.session_id, checklist=checklist, dropped=dropped
        )

    async def log_set(
        self,
        channel_id: str,
        exercise: str,
        weight: float,
        reps: int,
        notes: str = "",
    ) -> SetLogged:
        """Record one set against the channel's active session."""
        session_id = self._require_session(channel_id)

        data = await self.client.submit(
            "log_set",
            {
                "session_id": session_id,
                "exercise": exercise,
                "weight": weight,
                "reps": reps,
                "notes": notes or "",
            },
        )
        reply = _parse_reply(LogSetReply, "log_set", data)

        return SetLogged(
            session_id=session_id,
            exercise=exercise,
            weight=weight,
            reps=reps,
            notes=notes or "",
            next_target=reply.next_target,
        )

    async def end_session(self, channel_id: str) -> SessionEnded:
        """Close the channel's session; it stays active if the backend fails."""
        session_id = self._require_session(channel_id)

        data = await self.client.submit("session_end", {"session_id": session_id})
        reply = _parse_reply(SessionEndReply, "session_end", data)

        self.sessions.end(channel_id, session_id)
        return SessionEnded(session_id=session_id, summary_text=reply.summary_text)

    def suggest_exercises(self, query: str, limit: int = MAX_SUGGESTIONS) -> list[str]:
        """Rank cached exercise names for autocomplete. Never waits on I/O."""
        self.catalog.request_refresh_if_cold()
        return rank(query, self.catalog.current_names(), limit)

    def _require_session(self, channel_id: str) -> str:
        session_id = self.sessions.get(channel_id)
        if not session_id:
            raise NoActiveSession(channel_id)
        return session_id

    # ------------------------------------------------------------------
    # Render wrappers
    # ------------------------------------------------------------------

    async def handle_start_session(self, channel_id: str, plan_text: str = "") -> Reply:
        result = await self._guard(
            "session_start", channel_id, lambda: self.start_session(channel_id, plan_text)
        )
        if isinstance(result, Reply):
            return result
        return Reply.message(render.session_started(result.session_id, result.checklist))

    async def handle_log_set(
        self,
        channel_id: str,
        exercise: str,
        weight: float,
        reps: int,
        notes: str = "",
    ) -> Reply:
        result = await self._guard(
            "log",
            channel_id,
            lambda: self.log_set(channel_id, exercise, weight, reps, notes),
        )
        if isinstance(result, Reply):
            return result
        return Reply.message(
            render.set_logged(
                result.exercise,
                result.weight,
                result.reps,
                result.notes,
                result.next_target,
            )
        )

    async def handle_end_session(self, channel_id: str) -> Reply:
        result = await self._guard(
            "session_end", channel_id, lambda: self.end_session(channel_id)
        )
        if isinstance(result, Reply):
            return result
        return Reply.message(render.session_ended(result.summary_text))

    def handle_autocomplete(self, query: str) -> Reply:
        return Reply.choices(self.suggest_exercises(query))

    def plan_form(self) -> Reply:
        return Reply.plan_form(render.PLAN_FORM_PROMPT)

    async def _guard(
        self,
        command: str,
        channel_id: str,
        action: Callable[[], Awaitable[ResultT]],
    ) -> ResultT | Reply:
        try:
            return await action()
        except NoActiveSession:
            logger.info("Channel %s: %s without an active session", channel_id, command)
            return Reply.error(render.NO_ACTIVE_SESSION)
        except BackendRejected as exc:
            return Reply.error(render.command_error(command, exc.message))
        except LiftLoggerError as exc:
            logger.warning("Channel %s: %s failed: %s", channel_id, command, exc)
            return Reply.error(render.command_error(command, str(exc)))
