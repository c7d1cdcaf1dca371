"""
Exceptions raised by the pairing engine.
"""


class PairingError(Exception):
    """Base class for all pairing engine errors."""


class InvalidPlayerCountError(PairingError, ValueError):
    """Raised when a format is asked to pair fewer players than it supports."""


class InvalidRosterError(PairingError, ValueError):
    """Raised for malformed player input (duplicate ids, out-of-range scores, bad files)."""


class PairingInfeasibleError(PairingError):
    """Raised when no legal Swiss pairing could be found."""


class BracketStructureError(PairingError):
    """Raised when a generated bracket breaks a structural invariant."""
