"""Exceptions raised by the repository and query path."""


class CanarydError(Exception):
    """Base class for canaryd errors."""


class StorageError(CanarydError):
    """A score store operation failed or timed out.

    The original backend exception is chained as ``__cause__``.
    """

    def __init__(self, operation: str, key: str, reason: str = "") -> None:
        self.operation = operation
        self.key = key
        message = f"{operation} failed for {key}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MalformedEntryError(CanarydError):
    """A stored member could not be decoded into a Measurement."""

    def __init__(self, key: str, member: str) -> None:
        self.key = key
        self.member = member
        super().__init__(f"Malformed entry in {key}: {member[:80]!r}")


class InvalidRangeError(CanarydError):
    """The range query parameter is not a base-10 integer."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"range must be an integer number of seconds, got {value!r}")
