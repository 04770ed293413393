"""Exception hierarchy for constraint solving."""


class FarcError(Exception):
    """Base exception for solver failures."""


class ConfigurationError(FarcError):
    """Raised when a system is wired together incorrectly.

    These halt the search; they are never reported as an empty result.
    """


class UnknownVariableError(ConfigurationError):
    """Raised when a constraint refers to a variable outside the universe."""


class HeuristicError(ConfigurationError):
    """Raised when a heuristic proposes an invalid branch."""


class ProblemFormatError(ConfigurationError):
    """Raised when a problem description cannot be parsed."""


class UndecidedVariableError(FarcError):
    """Raised when a constraint is verified before its scope is decided."""
