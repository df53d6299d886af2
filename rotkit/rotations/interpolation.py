"""
Interpolation between two rotations.

These wrap :func:`.core.quaternion_math.nlerp` and :func:`.core.quaternion_math.slerp` for the rotation
representations.  Both rotations must share their usage and scalar type.  The result has the representation of the
first rotation.
"""

from typing import TypeVar

from rotkit._typing import DatetimeLike

from rotkit.rotations.core.quaternion_math import nlerp as _nlerp, slerp as _slerp
from rotkit.rotations.rotation_base import RotationLike, RotationOperators


__all__ = ['nlerp', 'slerp']


RotationT = TypeVar('RotationT', bound=RotationOperators)


def nlerp(rotation0: RotationT, rotation1: RotationLike,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1) -> RotationT:
    """
    Normalized linear interpolation between two rotations.

    See :func:`.core.quaternion_math.nlerp` for the details and the meaning of the time arguments.

    :param rotation0: the rotation at `time0`
    :param rotation1: the rotation at `time1`
    :param time: the time to interpolate at
    :param time0: the time of the first rotation
    :param time1: the time of the second rotation
    :return: the interpolated rotation in the representation of `rotation0`
    :raises UsageMismatchError: if the usages differ
    :raises PrecisionMismatchError: if the scalar types differ
    """

    rotation0._check_compatible(rotation1)

    quaternion = _nlerp(rotation0.as_quaternion_array(), rotation1.as_quaternion_array(), time, time0, time1)

    return type(rotation0).from_quaternion_array(quaternion, rotation0.usage, rotation0.dtype)


def slerp(rotation0: RotationT, rotation1: RotationLike,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1) -> RotationT:
    """
    Spherical linear interpolation between two rotations, at constant angular rate along the shorter arc.

    See :func:`.core.quaternion_math.slerp` for the details and the meaning of the time arguments.  For example, with
    datetime times::

        >>> from datetime import datetime
        >>> from rotkit.rotations import slerp, RotationVector
        >>> slerp(RotationVector(0, 0, 0), RotationVector(0, 0, 1.0),
        ...       datetime(2020, 1, 1, 0, 0, 30), datetime(2020, 1, 1), datetime(2020, 1, 1, 0, 1))
        RotationVector(array([0. , 0. , 0.5]), usage=Usage.ACTIVE, dtype=float64)

    :param rotation0: the rotation at `time0`
    :param rotation1: the rotation at `time1`
    :param time: the time to interpolate at
    :param time0: the time of the first rotation
    :param time1: the time of the second rotation
    :return: the interpolated rotation in the representation of `rotation0`
    :raises UsageMismatchError: if the usages differ
    :raises PrecisionMismatchError: if the scalar types differ
    """

    rotation0._check_compatible(rotation1)

    quaternion = _slerp(rotation0.as_quaternion_array(), rotation1.as_quaternion_array(), time, time0, time1)

    return type(rotation0).from_quaternion_array(quaternion, rotation0.usage, rotation0.dtype)
