"""Exceptions raised by the simulation core."""


class InvadersError(Exception):
    """Base class for every error the core raises."""


class ConfigurationError(InvadersError, ValueError):
    """A GameConfig or formation cannot be built from the given values."""


class InvariantViolation(InvadersError, ValueError):
    """A caller handed the simulation an input it cannot repair (NaN time, ...)."""
