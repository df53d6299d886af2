r"""
This module provides the rotation vector (exponential coordinates) representation.

A rotation vector :math:`\mathbf{v}=\theta\hat{\mathbf{x}}` encodes the rotation angle as its norm and the rotation
axis as its direction.  Rotation vectors are not unique, there is a long and a short vector (and every whole turn in
between) that represent the same rotation.  :meth:`.RotationVector.get_unique` returns the vector with a norm in
:math:`[0, \pi]`.

Composition and inversion go through the quaternion hub, which is exact to round off, instead of a series expansion of
the composition in exponential coordinates.
"""

from typing import Self

import numpy as np

from rotkit._typing import ARRAY_LIKE, FLOAT_ARRAY, SCALAR_TYPE_LIKE

from rotkit.rotations.core._helpers import _check_finite, _check_vector_array_and_shape, _freeze, _gather_components
from rotkit.rotations.core.conversions import DEFAULT_AXIS, quaternion_to_rotvec, rotvec_to_quaternion, rotvec_unique
from rotkit.rotations.rotation_base import RotationOperators
from rotkit.rotations.usage import Usage


__all__ = ['RotationVector']


class RotationVector(RotationOperators):
    """
    A rotation stored as a 3 element rotation vector.

    The vector is given as 3 scalars or as a single sequence, ``RotationVector(x, y, z)`` or
    ``RotationVector([x, y, z])``.  Any finite vector is a valid rotation::

        >>> from rotkit.rotations import RotationVector, RotationQuaternion
        >>> from numpy import sqrt
        >>> RotationQuaternion(1/sqrt(2), 1/sqrt(2), 0, 0).to(RotationVector)
        RotationVector(array([1.57079633, 0.        , 0.        ]), usage=Usage.ACTIVE, dtype=float64)
    """

    def __init__(self, *components: float | ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                 dtype: SCALAR_TYPE_LIKE = np.float64):
        """
        :param components: either ``x, y, z`` or a single sequence ``[x, y, z]``
        :param usage: the usage convention of the rotation
        :param dtype: the scalar type to store the rotation in
        :raises InvalidRotationError: if the vector contains non-finite values
        """

        self._set_tags(usage, dtype)

        vector = _check_vector_array_and_shape(_gather_components(components, 3, 'rotation vector'), self.dtype)

        self._vector = _freeze(_check_finite(vector, 'rotation vector'))

    @property
    def vector(self) -> FLOAT_ARRAY:
        """
        The rotation vector (read only).
        """

        return self._vector

    @property
    def x(self) -> float:
        return self._vector[0]

    @property
    def y(self) -> float:
        return self._vector[1]

    @property
    def z(self) -> float:
        return self._vector[2]

    @property
    def angle(self) -> float:
        """
        The rotation angle in radians, the norm of the vector.
        """

        return float(np.linalg.norm(self._vector))

    @property
    def axis(self) -> FLOAT_ARRAY:
        """
        The unit rotation axis.  For the zero vector this is ``(1, 0, 0)``.
        """

        angle = np.linalg.norm(self._vector)

        if angle == 0:
            return np.array(DEFAULT_AXIS, dtype=self.dtype)

        return self._vector / angle

    def to_stored_implementation(self) -> FLOAT_ARRAY:
        return self._vector.copy()

    @classmethod
    def from_stored_implementation(cls, stored: ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                                   dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        return cls(stored, usage=usage, dtype=dtype)

    def as_quaternion_array(self) -> FLOAT_ARRAY:
        return rotvec_to_quaternion(self._vector)

    @classmethod
    def from_quaternion_array(cls, quaternion: ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                              dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        return cls(quaternion_to_rotvec(np.asarray(quaternion, dtype=dtype)), usage=usage, dtype=dtype)

    def inverted(self) -> Self:
        """
        Return the inverse rotation, the negated vector.
        """

        return type(self)(-self._vector, usage=self.usage, dtype=self.dtype)

    def get_unique(self) -> Self:
        """
        Return the rotation vector with a norm in :math:`[0, \\pi]`.

        The vector is shortened by whole turns and flipped when needed.  At a norm of :math:`\\pi` the direction is
        chosen so that the largest magnitude component is positive.

        :return: the canonical rotation vector
        """

        return type(self)(rotvec_unique(self._vector), usage=self.usage, dtype=self.dtype)
