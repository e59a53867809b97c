"""Exception hierarchy for burne.

Everything except rename failures during execution is raised before the
filesystem is touched.
"""

from burne.names import display_name


class BurneError(Exception):
    """Base exception for burne."""

    pass


class SnapshotError(BurneError):
    pass


class EscapeError(BurneError):
    """A filename cannot be represented as a line of text."""

    def __init__(self, name: bytes, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"cannot escape filename {display_name(name)!r}: {reason}")


class MalformedInputError(BurneError):
    pass


class LineCountError(MalformedInputError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} line(s) but got {actual}")


class DuplicateDestinationError(MalformedInputError):
    """Two files were mapped to the same destination."""

    def __init__(self, first: bytes, second: bytes, destination: bytes) -> None:
        self.first = first
        self.second = second
        self.destination = destination
        super().__init__(
            "two files mapped to the same destination: "
            f"{display_name(first)!r} and {display_name(second)!r} -> {display_name(destination)!r}"
        )


class InvalidDestinationError(MalformedInputError):
    def __init__(self, source: bytes, destination: bytes, reason: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"invalid destination {display_name(destination)!r} for {display_name(source)!r}: {reason}")


class EditorError(BurneError):
    def __init__(self, message: str, exit_code: int | None = None) -> None:
        self.exit_code = exit_code
        super().__init__(message)


class PlanExecutionError(BurneError):
    pass
