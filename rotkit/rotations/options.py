"""
This module provides the numerical thresholds used by the rotation conversions and the accessors for the process wide
defaults.

The defaults are read every time a rotation is constructed or converted.  They are meant to be configured once at
start-up through :func:`set_rotation_options`; changing them while other threads are building rotations is not
supported.
"""

import logging

from dataclasses import dataclass

from rotkit.utilities.options import UserOptions


__all__ = ['RotationOptions', 'get_rotation_options', 'set_rotation_options']


_LOGGER: logging.Logger = logging.getLogger(__name__)


@dataclass
class RotationOptions(UserOptions):
    """
    :param small_angle_threshold: the norm of the vector part of a quaternion (or of a rotation vector) below which the
                                  Taylor series forms of the conversions are used
    :param angle_tolerance: how close a canonicalized angle must be to pi to be snapped to exactly pi
    :param orthonormality_tolerance: the maximum deviation of :math:`\\mathbf{R}\\mathbf{R}^T` from the identity that is
                                     accepted when building a rotation matrix
    :param unit_tolerance: the deviation from unit length above which a quaternion input is reported as normalized
    """

    small_angle_threshold: float = 1e-6
    """
    Threshold below which the small angle (Taylor series) forms of the quaternion conversions are used.

    Below this value the neglected terms of the expansions are smaller than double precision round off.
    """

    angle_tolerance: float = 1e-6
    """
    Canonical angles within this distance of pi are treated as exactly pi and go through the axis tie-break.
    """

    orthonormality_tolerance: float = 1e-5
    """
    The largest element of :math:`\\mathbf{R}\\mathbf{R}^T-\\mathbf{I}` accepted for a rotation matrix.

    This is loose enough to accept single precision matrices.
    """

    unit_tolerance: float = 1e-6
    """
    Quaternions further than this from unit length are logged when they are normalized.
    """

    def __post_init__(self):
        self.override_options()

    def override_options(self):

        for name, value in (('small_angle_threshold', self.small_angle_threshold),
                            ('angle_tolerance', self.angle_tolerance),
                            ('orthonormality_tolerance', self.orthonormality_tolerance),
                            ('unit_tolerance', self.unit_tolerance)):
            if not value > 0:
                raise ValueError(f'{name} must be positive, got {value}')


_OPTIONS = RotationOptions()


def get_rotation_options() -> RotationOptions:
    """
    Return the current default :class:`RotationOptions`.
    """

    return _OPTIONS


def set_rotation_options(options: RotationOptions | None = None, **overrides: float) -> RotationOptions:
    """
    Replace the default rotation options.

    Either a complete :class:`RotationOptions` instance can be provided, or individual fields can be overridden by
    keyword, or both (the keywords are then applied on top of `options`).  Calling this with no arguments restores the
    library defaults.

    :param options: the new options
    :param overrides: fields to override
    :return: the options that were replaced so that they can be restored later
    :raises ValueError: if any of the thresholds is not positive
    """

    global _OPTIONS

    new = RotationOptions() if options is None else options
    new = new.updated(**overrides)

    previous = _OPTIONS
    _OPTIONS = new

    _LOGGER.info(f'Rotation options updated to {new.options_dict}')

    return previous
