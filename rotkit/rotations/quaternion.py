# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This module provides the unit quaternion rotation representation, the hub every other representation converts through.

A rotation quaternion has the form

.. math::
    \mathbf{q}=\left[\begin{array}{c} w \\ x \\ y \\ z\end{array}\right]=
    \left[\begin{array}{c}\text{cos}(\frac{\theta}{2})\\
    \text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\end{array}\right]

where :math:`\hat{\mathbf{x}}` is the unit rotation axis and :math:`\theta` is the rotation angle.  Quaternions are not
unique in that :math:`\mathbf{q}` and :math:`-\mathbf{q}` represent the same rotation; :meth:`.get_unique` picks one of
the two.
"""

import logging

from typing import Self

import numpy as np

from rotkit._typing import ARRAY_LIKE, FLOAT_ARRAY, SCALAR_TYPE_LIKE

from rotkit.rotations.core._helpers import _check_finite, _check_quaternion_array_and_shape, _freeze, _gather_components
from rotkit.rotations.core.quaternion_math import quaternion_inverse, quaternion_normalize, quaternion_unique
from rotkit.rotations.exceptions import InvalidRotationError
from rotkit.rotations.options import get_rotation_options
from rotkit.rotations.rotation_base import RotationOperators
from rotkit.rotations.usage import Usage


__all__ = ['RotationQuaternion']


_LOGGER: logging.Logger = logging.getLogger(__name__)


class RotationQuaternion(RotationOperators):
    """
    A rotation stored as a unit quaternion ``(w, x, y, z)``.

    The quaternion can be built from 4 scalars or from a single sequence of 4 elements, always ordered scalar first.
    The input does not need to be of unit length; it is normalized on construction.  A zero quaternion cannot be
    normalized and raises :class:`.InvalidRotationError`::

        >>> from rotkit.rotations import RotationQuaternion
        >>> from numpy import sqrt
        >>> quarter_x = RotationQuaternion(1/sqrt(2), 1/sqrt(2), 0, 0)
        >>> (quarter_x * quarter_x * quarter_x * quarter_x).get_unique()
        RotationQuaternion(array([1., 0., 0., 0.]), usage=Usage.ACTIVE, dtype=float64)

    (up to round off).  Composition is the Hamilton product with the operand order set by the usage, see
    :func:`.compose_quaternions`.  Inversion is the conjugate.
    """

    def __init__(self, *components: float | ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                 dtype: SCALAR_TYPE_LIKE = np.float64):
        """
        :param components: either ``w, x, y, z`` or a single sequence ``[w, x, y, z]``
        :param usage: the usage convention of the rotation
        :param dtype: the scalar type to store the rotation in
        :raises InvalidRotationError: if the quaternion is zero or contains non-finite values
        """

        self._set_tags(usage, dtype)

        quaternion = _check_finite(_check_quaternion_array_and_shape(_gather_components(components, 4, 'quaternion'),
                                                                     self.dtype), 'quaternion')

        norm = np.linalg.norm(quaternion)

        if norm == 0:
            raise InvalidRotationError('The zero quaternion does not represent a rotation')

        if abs(norm - 1) > get_rotation_options().unit_tolerance:
            _LOGGER.debug(f'normalizing quaternion {quaternion} with norm {norm}')

        self._quaternion = _freeze(quaternion_normalize(quaternion))

    @property
    def w(self) -> float:
        """
        The scalar part of the quaternion.
        """

        return self._quaternion[0]

    @property
    def x(self) -> float:
        """
        The first element of the vector part of the quaternion.
        """

        return self._quaternion[1]

    @property
    def y(self) -> float:
        """
        The second element of the vector part of the quaternion.
        """

        return self._quaternion[2]

    @property
    def z(self) -> float:
        """
        The third element of the vector part of the quaternion.
        """

        return self._quaternion[3]

    @property
    def real(self) -> float:
        """
        An alias to :attr:`w`.
        """

        return self._quaternion[0]

    @property
    def imaginary(self) -> FLOAT_ARRAY:
        """
        The vector part of the quaternion ``[x, y, z]`` (read only).
        """

        return self._quaternion[1:]

    @property
    def norm(self) -> float:
        """
        The norm of the stored quaternion, which is 1 up to round off.
        """

        return float(np.linalg.norm(self._quaternion))

    def to_stored_implementation(self) -> FLOAT_ARRAY:
        return self._quaternion.copy()

    @classmethod
    def from_stored_implementation(cls, stored: ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                                   dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        return cls(stored, usage=usage, dtype=dtype)

    def as_quaternion_array(self) -> FLOAT_ARRAY:
        return self._quaternion.copy()

    @classmethod
    def from_quaternion_array(cls, quaternion: ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                              dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        return cls(quaternion, usage=usage, dtype=dtype)

    def inverted(self) -> Self:
        """
        Return the inverse rotation, the conjugate quaternion.
        """

        return type(self)(quaternion_inverse(self._quaternion), usage=self.usage, dtype=self.dtype)

    def get_unique(self) -> Self:
        """
        Return the quaternion with the canonical sign.

        The sign is chosen so that :math:`w\\geq 0`.  If :math:`w` is exactly zero, the first nonzero element of
        ``(x, y, z)`` is made positive.

        :return: the canonical quaternion
        """

        return type(self)(quaternion_unique(self._quaternion), usage=self.usage, dtype=self.dtype)
