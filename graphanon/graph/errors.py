"""Exception hierarchy for graph parsing, configuration, and distribution comparison."""


class GraphAnonError(Exception):
    """Base class for all errors raised by graphanon."""


class InvalidInputError(GraphAnonError):
    """Raised when a graph file or string cannot be parsed.

    Carries the 1-based line number and the name of the offending field
    when they are known, so callers can point the user at the bad input.
    """

    def __init__(
        self, message: str, line: int | None = None, field: str | None = None
    ) -> None:
        self.line = line
        self.field = field
        location = []
        if line is not None:
            location.append(f"line {line}")
        if field is not None:
            location.append(f"field {field!r}")
        if location:
            message = f"{message} ({', '.join(location)})"
        super().__init__(message)


class ConfigurationError(GraphAnonError):
    """Raised when a precondition on graph or run parameters is violated."""


class DimensionMismatchError(GraphAnonError):
    """Raised when two label distributions over different label counts are compared."""
