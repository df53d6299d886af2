r"""
This module provides the Euler angle rotation representations.

Two sequences are supported, both applied as intrinsic rotations:

=================  ===================================================================================================
Representation     Description
=================  ===================================================================================================
EulerAnglesZyx     yaw :math:`\psi`, pitch :math:`\theta` and roll :math:`\phi` with the active matrix
                   :math:`\mathbf{R}_z(\psi)\mathbf{R}_y(\theta)\mathbf{R}_x(\phi)`
EulerAnglesXyz     angles :math:`a, b, c` about x, y and z with the active matrix
                   :math:`\mathbf{R}_x(a)\mathbf{R}_y(b)\mathbf{R}_z(c)`
=================  ===================================================================================================

Like the quaternion, the angles are the same for both usages; the PASSIVE matrix is the transpose of the ACTIVE one.
The canonical angles have the first and last angle in :math:`(-\pi, \pi]` and the middle angle in
:math:`[-\pi/2, \pi/2]`.  At gimbal lock the last angle is set to zero.
"""

from typing import Self, ClassVar

import numpy as np

from rotkit._typing import ARRAY_LIKE, FLOAT_ARRAY, SCALAR_TYPE_LIKE, EULER_ORDERS

from rotkit.rotations.core._helpers import _check_finite, _check_vector_array_and_shape, _freeze, _gather_components
from rotkit.rotations.core.conversions import euler_to_quaternion, quaternion_to_euler
from rotkit.rotations.rotation_base import RotationOperators
from rotkit.rotations.usage import Usage


__all__ = ['EulerAnglesZyx', 'EulerAnglesXyz']


class _EulerAngles(RotationOperators):

    order: ClassVar[EULER_ORDERS]

    def __init__(self, *angles: float | ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                 dtype: SCALAR_TYPE_LIKE = np.float64):

        self._set_tags(usage, dtype)

        angles = _check_vector_array_and_shape(_gather_components(angles, 3, 'set of euler angles'), self.dtype)

        self._angles = _freeze(_check_finite(angles, 'euler angles'))

    @property
    def angles(self) -> FLOAT_ARRAY:
        """
        The three angles in radians in the order of the sequence (read only).
        """

        return self._angles

    def to_stored_implementation(self) -> FLOAT_ARRAY:
        return self._angles.copy()

    @classmethod
    def from_stored_implementation(cls, stored: ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                                   dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        return cls(stored, usage=usage, dtype=dtype)

    def as_quaternion_array(self) -> FLOAT_ARRAY:
        return euler_to_quaternion(self._angles, self.order)

    @classmethod
    def from_quaternion_array(cls, quaternion: ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                              dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        return cls(quaternion_to_euler(np.asarray(quaternion, dtype=dtype), cls.order), usage=usage, dtype=dtype)

    def get_unique(self) -> Self:
        """
        Return the canonical angles by a round trip through the quaternion.
        """

        return type(self).from_quaternion_array(self.as_quaternion_array(), self.usage, self.dtype)


class EulerAnglesZyx(_EulerAngles):
    """
    A rotation stored as yaw, pitch and roll angles of the z-y-x sequence.

    The angles are given as 3 scalars or a single sequence, ``EulerAnglesZyx(yaw, pitch, roll)``.
    """

    order = 'zyx'

    @property
    def yaw(self) -> float:
        """
        The angle about z, applied first in the intrinsic sequence.
        """

        return self._angles[0]

    @property
    def pitch(self) -> float:
        """
        The angle about the intermediate y axis.
        """

        return self._angles[1]

    @property
    def roll(self) -> float:
        """
        The angle about the final x axis.
        """

        return self._angles[2]


class EulerAnglesXyz(_EulerAngles):
    """
    A rotation stored as the angles of the x-y-z sequence.

    The angles are given as 3 scalars or a single sequence, ``EulerAnglesXyz(x, y, z)``.
    """

    order = 'xyz'

    @property
    def x(self) -> float:
        return self._angles[0]

    @property
    def y(self) -> float:
        return self._angles[1]

    @property
    def z(self) -> float:
        return self._angles[2]
