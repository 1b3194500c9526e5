"""Domain errors surfaced to API callers."""


class ProfileNotFoundError(LookupError):
    """Raised when a username or user id has no profile."""


class NotFriendsError(PermissionError):
    """Raised when a viewer asks for data restricted to friends."""


class InvalidTimeRangeError(ValueError):
    """Raised for an unknown time range tag."""
