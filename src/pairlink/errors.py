"""Exception types raised by the pairlink core."""


class PairlinkError(Exception):
    """Base class for every error raised by the puzzle engine."""


class ConfigurationError(PairlinkError, ValueError):
    """Raised for grid configurations that cannot produce a playable board."""


class InvariantViolation(PairlinkError, RuntimeError):
    """Raised when internal operations are invoked with operands the rules forbid.

    Never reachable through tile activation; only direct misuse of
    ``GameLifecycleSystem.resolve_match`` and friends triggers it.
    """
