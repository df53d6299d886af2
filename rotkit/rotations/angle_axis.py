r"""
This module provides the angle-axis rotation representation.

An angle-axis pair :math:`(\theta, \hat{\mathbf{x}})` rotates by :math:`\theta` radians about the unit axis
:math:`\hat{\mathbf{x}}`.  The pair is not unique:
:math:`(\theta, \hat{\mathbf{x}})\equiv(\theta+2\pi k, \hat{\mathbf{x}})\equiv(-\theta, -\hat{\mathbf{x}})`.
:meth:`.AngleAxis.get_unique` chooses the representative with :math:`\theta\in[0, \pi]`; see
:func:`.angle_axis_unique` for the tie-break at :math:`\theta=\pi`.

There is no closed form composition of two angle-axis pairs; composition converts both operands to quaternions,
composes them there and converts back.
"""

from typing import Self

import numpy as np

from rotkit._typing import ARRAY_LIKE, FLOAT_ARRAY, SCALAR_TYPE_LIKE

from rotkit.rotations.core._helpers import _check_finite, _check_vector_array_and_shape, _freeze
from rotkit.rotations.core.conversions import (DEFAULT_AXIS, angle_axis_to_quaternion, angle_axis_unique,
                                               quaternion_to_angle_axis)
from rotkit.rotations.exceptions import InvalidRotationError
from rotkit.rotations.rotation_base import RotationOperators
from rotkit.rotations.usage import Usage


__all__ = ['AngleAxis']


class AngleAxis(RotationOperators):
    """
    A rotation stored as an angle in radians and a unit axis.

    The axis can be given as a single sequence or as 3 scalars, ``AngleAxis(angle, axis)`` or
    ``AngleAxis(angle, x, y, z)``.  It is normalized on construction.  When the angle is exactly zero the axis is
    undefined and is set to ``(1, 0, 0)`` whatever was given.  A zero axis with a nonzero angle raises
    :class:`.InvalidRotationError`.
    """

    def __init__(self, angle: float, *axis: float | ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                 dtype: SCALAR_TYPE_LIKE = np.float64):
        """
        :param angle: the rotation angle in radians
        :param axis: the rotation axis, either a single sequence or 3 scalars
        :param usage: the usage convention of the rotation
        :param dtype: the scalar type to store the rotation in
        :raises InvalidRotationError: if the axis is zero while the angle is not, or any value is not finite
        """

        self._set_tags(usage, dtype)

        if len(axis) == 1:
            axis = axis[0]
        elif len(axis) != 3:
            raise TypeError(f'The axis is given as 3 scalars or a single sequence of 3 elements, '
                            f'got {len(axis)} arguments')

        angle = _check_finite(np.array(angle, dtype=self.dtype), 'angle')
        axis = _check_finite(_check_vector_array_and_shape(axis, self.dtype), 'axis')

        if angle == 0:
            axis = np.array(DEFAULT_AXIS, dtype=self.dtype)
        else:
            norm = np.linalg.norm(axis)

            if norm == 0:
                raise InvalidRotationError(f'The axis of a rotation by {angle} radians cannot be zero')

            axis /= norm

        self._angle = _freeze(angle)
        self._axis = _freeze(axis)

    @property
    def angle(self) -> float:
        """
        The rotation angle in radians.
        """

        return self._angle[()]

    @property
    def axis(self) -> FLOAT_ARRAY:
        """
        The unit rotation axis (read only).
        """

        return self._axis

    def to_stored_implementation(self) -> FLOAT_ARRAY:
        """
        Return the angle and the axis as a single 4 element array ``[angle, x, y, z]``.
        """

        return np.concatenate([[self._angle], self._axis]).astype(self.dtype)

    @classmethod
    def from_stored_implementation(cls, stored: ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                                   dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        stored = np.asarray(stored).ravel()

        return cls(stored[0], stored[1:], usage=usage, dtype=dtype)

    def as_quaternion_array(self) -> FLOAT_ARRAY:
        return angle_axis_to_quaternion(self._angle[()], self._axis)

    @classmethod
    def from_quaternion_array(cls, quaternion: ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                              dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        angle, axis = quaternion_to_angle_axis(np.asarray(quaternion, dtype=dtype))

        return cls(angle, axis, usage=usage, dtype=dtype)

    def inverted(self) -> Self:
        """
        Return the inverse rotation: the angle is negated and the result canonicalized.
        """

        return type(self)(-self._angle, self._axis, usage=self.usage, dtype=self.dtype).get_unique()

    def get_unique(self) -> Self:
        """
        Return the canonical angle-axis pair with the angle in :math:`[0, \\pi]`.

        At an angle of :math:`\\pi` the axis is chosen so that its largest magnitude component is positive.

        :return: the canonical angle-axis pair
        """

        angle, axis = angle_axis_unique(self._angle[()], self._axis)

        return type(self)(angle, axis, usage=self.usage, dtype=self.dtype)
