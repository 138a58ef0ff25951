"""Error taxonomy shared by the backend client, catalog and coordinator."""


class LiftLoggerError(Exception):
    """Base class for every expected, recoverable failure."""


class BackendError(LiftLoggerError):
    """The workout backend could not fulfil a request."""


class BackendUnavailable(BackendError):
    """Network failure, HTTP error status or unreadable reply."""


class BackendTimeout(BackendUnavailable):
    """The backend did not answer within the caller's deadline."""


class BackendRejected(BackendError):
    """The backend answered, but without a success flag."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NoActiveSession(LiftLoggerError):
    """A log or end command arrived for a channel without a session."""

    def __init__(self, channel_id: str) -> None:
        super().__init__(f"No active session for channel {channel_id}")
        self.channel_id = channel_id


class InvalidCatalogReply(LiftLoggerError):
    """A list_exercises reply was malformed or contained no names."""
