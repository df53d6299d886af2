"""
The exceptions raised by the rotation representations.

Degenerate but legitimate geometry (a zero rotation angle, a rotation by exactly pi, vanishing sine terms) is always
resolved internally and never raises.  Only input that cannot describe a rotation at all, or mixing rotations that do
not share a usage or scalar type, is reported.
"""

__all__ = ['RotationError', 'InvalidRotationError', 'UsageMismatchError', 'PrecisionMismatchError']


class RotationError(Exception):
    """
    Base class for all errors raised by :mod:`rotkit.rotations`.
    """


class InvalidRotationError(RotationError, ValueError):
    """
    Raised when raw components cannot represent a rotation regardless of normalization.

    For example a zero quaternion, a non-finite component, or a matrix with a negative determinant.
    """


class UsageMismatchError(RotationError, TypeError):
    """
    Raised when an ACTIVE rotation is composed with or compared to a PASSIVE rotation.
    """


class PrecisionMismatchError(RotationError, TypeError):
    """
    Raised when rotations of different scalar types are composed or compared without an explicit cast.

    Use :meth:`~.RotationOperators.astype` to cast one of the operands first.
    """
