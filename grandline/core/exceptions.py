"""
Custom exception hierarchy for the Grand Line engine and services.

Provides typed errors that can be handled consistently across
the core engine, services, and API layer. Every one of them rejects the
operation without a partial state change.
"""


class MonopolyError(Exception):
    """Base exception for all game-related errors."""


class AuthorizationError(MonopolyError):
    """Caller has no resolvable identity."""


class GameNotFoundError(MonopolyError):
    """Game does not exist."""


class PropertyNotFoundError(GameNotFoundError):
    """No Property record for the requested space."""


class PreconditionError(MonopolyError):
    """Action is not legal in the current state (wrong phase, wrong turn, AI seat)."""


class InsufficientFundsError(MonopolyError):
    """Player cannot afford the purchase."""


class ValidationError(MonopolyError):
    """Input validation failed."""


class DatabaseError(MonopolyError):
    """Database operation failed."""
