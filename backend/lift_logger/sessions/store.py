"""In-memory mapping of chat channels to their active workout session.

State is volatile: it lives for the process lifetime only. Every method is
synchronous, so under the single asyncio event loop each call is atomic with
respect to other handlers, and channels never interfere with one another.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class SessionStore:
    """At most one backend session id per channel."""

    def __init__(self) -> None:
        self._sessions: dict[str, str] = {}

    def get(self, channel_id: str) -> Optional[str]:
        """Return the active session id for ``channel_id``, if any."""
        return self._sessions.get(channel_id)

    def start(self, channel_id: str, session_id: str) -> None:
        """Record ``session_id`` for the channel, superseding any previous one."""
        previous = self._sessions.get(channel_id)
        self._sessions[channel_id] = session_id
        if previous and previous != session_id:
            logger.info(
                "Channel %s: session %s superseded by %s",
                channel_id,
                previous,
                session_id,
            )
        else:
            logger.info("Channel %s: session %s started", channel_id, session_id)

    def end(self, channel_id: str, session_id: Optional[str] = None) -> bool:
        """Clear the channel's session. Idempotent.

        Args:
            channel_id: Channel to clear.
            session_id: If given, only clear when the channel still holds this
                id, so a late end cannot wipe a newer session.

        Returns:
            True if an entry was removed.
        """
        current = self._sessions.get(channel_id)
        if current is None:
            return False
        if session_id is not None and current != session_id:
            logger.info(
                "Channel %s: not clearing %s, session %s is now active",
                channel_id,
                session_id,
                current,
            )
            return False

        del self._sessions[channel_id]
        logger.info("Channel %s: session %s ended", channel_id, current)
        return True

    def active_sessions(self) -> dict[str, str]:
        """Copy of the channel -> session id mapping."""
        return dict(self._sessions)

    def __contains__(self, channel_id: object) -> bool:
        return channel_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
