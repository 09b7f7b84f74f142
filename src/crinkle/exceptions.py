"""Custom exceptions for fractal strip generation.

Two families:

- ``CrinkleError`` covers conditions a caller can recover from (bad
  parameters, memory exhaustion, an exhausted scripted noise source).
- ``InvariantViolation`` marks defects: strips of the wrong size handed to
  an operator, a fold driven outside its state machine, or a chain used
  after release. These are never raised for ordinary input and should not
  be caught and retried.
"""


class CrinkleError(Exception):
    """Base exception for recoverable generation errors."""

    pass


class ConfigurationError(CrinkleError, ValueError):
    """Raised when chain or strip parameters are invalid."""

    pass


class AllocationError(CrinkleError, MemoryError):
    """Raised when a strip buffer cannot be allocated."""

    pass


class NoiseExhaustedError(CrinkleError):
    """Raised when a scripted noise source runs out of values."""

    pass


class InvariantViolation(RuntimeError):
    """Base exception for internal defects and API misuse."""

    pass


class SizeMismatchError(InvariantViolation):
    """Raised when strips passed to an operator have incompatible levels."""

    pass


class InvalidStateError(InvariantViolation):
    """Raised when a fold is driven outside its START/STORE protocol."""

    pass


class ChainReleasedError(InvariantViolation):
    """Raised when a released chain is used again."""

    pass
