"""Domain errors raised by the service layer."""


class TrackerError(Exception):
    """Base class for activity tracker errors."""


class ContentNotFoundError(TrackerError):
    """A user, content item or comment does not exist."""

    def __init__(self, kind: str, identifier: int) -> None:
        super().__init__(f"{kind.capitalize()} {identifier} not found")
        self.kind = kind
        self.identifier = identifier


class PermissionDeniedError(TrackerError):
    """The acting user does not own the targeted content."""
