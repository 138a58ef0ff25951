"""Session models for the ops API."""

from pydantic import BaseModel


class ActiveSession(BaseModel):
    """A channel with an open workout session."""

    channel_id: str
    session_id: str
