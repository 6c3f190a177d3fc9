"""Custom exceptions for CommResolve."""


class CommResolveError(Exception):
    """Base exception for all CommResolve errors."""


class ConfigError(CommResolveError):
    """Configuration-related errors."""


class TopologyError(CommResolveError):
    """A topology snapshot violates a resolver precondition.

    Raised for caller defects such as an empty snapshot or duplicate
    node ids. Never raised for reachability answers.
    """


class ScenarioError(CommResolveError):
    """Malformed scenario files."""

    def __init__(self, message: str, source: str = ""):
        if source:
            message = f"{source}: {message}"
        super().__init__(message)
