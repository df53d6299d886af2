# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This module provides the rotation matrix representation.

A rotation matrix is a :math:`3\times 3` orthonormal matrix with a determinant of +1.  For an ACTIVE rotation
:math:`\mathbf{R}_a\mathbf{y}` rotates the vector :math:`\mathbf{y}` inside a fixed frame.  The PASSIVE matrix of the
same rotation is the transpose, :math:`\mathbf{R}_p=\mathbf{R}_a^T`, and :math:`\mathbf{R}_p\mathbf{y}` expresses the
fixed vector :math:`\mathbf{y}` in the rotated frame.

Rotation matrices uniquely represent a rotation, so :meth:`.RotationMatrix.get_unique` only removes the numerical
drift that accumulates over many compositions.
"""

import logging

from typing import Self

import numpy as np

from rotkit._typing import ARRAY_LIKE, FLOAT_ARRAY, SCALAR_TYPE_LIKE

from rotkit.rotations.core._helpers import (_check_finite, _check_matrix_array_and_shape, _check_vector_array_and_shape,
                                            _freeze, _gather_components)
from rotkit.rotations.core.conversions import quaternion_to_rotmat, rotmat_to_quaternion
from rotkit.rotations.exceptions import InvalidRotationError
from rotkit.rotations.options import get_rotation_options
from rotkit.rotations.rotation_base import RotationOperators
from rotkit.rotations.usage import Usage


__all__ = ['RotationMatrix', 'orthonormalize_matrix']


_LOGGER: logging.Logger = logging.getLogger(__name__)


def orthonormalize_matrix(matrix: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    Return the rotation matrix closest to `matrix` in the Frobenius norm.

    This is the orthonormal factor of the polar decomposition, computed from the singular value decomposition
    :math:`\mathbf{M}=\mathbf{U}\mathbf{\Sigma}\mathbf{V}^T` as :math:`\mathbf{U}\mathbf{V}^T`, with the sign of the last
    column of :math:`\mathbf{U}` flipped if needed so that the determinant is +1.

    :param matrix: a :math:`3\times 3` matrix
    :return: the nearest rotation matrix, in the scalar type of the input
    :raises InvalidRotationError: if the matrix contains non-finite values
    """

    dtype = matrix.dtype if isinstance(matrix, np.ndarray) and matrix.dtype.kind == 'f' else np.float64

    matrix = _check_finite(_check_matrix_array_and_shape(matrix, dtype), 'rotation matrix')

    u, _, vt = np.linalg.svd(matrix)

    if np.linalg.det(u @ vt) < 0:
        u[:, 2] *= -1

    return (u @ vt).astype(dtype)


class RotationMatrix(RotationOperators):
    """
    A rotation stored as a :math:`3\\times 3` orthonormal matrix.

    The matrix can be built from 9 scalars in row major order or from a single :math:`3\\times 3` array like.  The
    input is expected to be orthonormal; deviations larger than
    :attr:`.RotationOptions.orthonormality_tolerance` raise :class:`.InvalidRotationError` unless
    ``orthonormalize=True`` is given, in which case the nearest rotation matrix is stored instead.  A matrix with a
    non-positive determinant is a reflection and always raises.

    The stored matrix depends on the usage: for the same rotation the PASSIVE matrix is the transpose of the ACTIVE one.
    Composition is the matrix product ``lhs @ rhs`` for both usages and inversion is the transpose.
    """

    def __init__(self, *components: float | ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                 dtype: SCALAR_TYPE_LIKE = np.float64, orthonormalize: bool = False):
        """
        :param components: either 9 scalars in row major order or a single 3x3 array like
        :param usage: the usage convention of the rotation
        :param dtype: the scalar type to store the rotation in
        :param orthonormalize: replace the input with the nearest rotation matrix instead of rejecting it when it is
                               not orthonormal
        :raises InvalidRotationError: if the matrix is not a rotation matrix
        """

        self._set_tags(usage, dtype)

        matrix = _check_finite(_check_matrix_array_and_shape(_gather_components(components, 9, 'rotation matrix'),
                                                             self.dtype), 'rotation matrix')

        if np.linalg.det(matrix) <= 0:
            raise InvalidRotationError(f'The matrix {matrix} has a non-positive determinant and is not a rotation')

        deviation = np.abs(matrix @ matrix.T - np.eye(3)).max()

        if orthonormalize:
            _LOGGER.debug(f'orthonormalizing rotation matrix with deviation {deviation}')
            matrix = orthonormalize_matrix(matrix)

        elif deviation > get_rotation_options().orthonormality_tolerance:
            raise InvalidRotationError(f'The matrix {matrix} is not orthonormal (deviation {deviation})')

        self._matrix = _freeze(matrix)

    @property
    def matrix(self) -> FLOAT_ARRAY:
        """
        The stored rotation matrix (read only).
        """

        return self._matrix

    def __getitem__(self, key):
        return self._matrix[key]

    def to_stored_implementation(self) -> FLOAT_ARRAY:
        return self._matrix.copy()

    @classmethod
    def from_stored_implementation(cls, stored: ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                                   dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        return cls(stored, usage=usage, dtype=dtype)

    def as_quaternion_array(self) -> FLOAT_ARRAY:
        return rotmat_to_quaternion(self._matrix, self.usage)

    @classmethod
    def from_quaternion_array(cls, quaternion: ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                              dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        quaternion = np.asarray(quaternion, dtype=dtype)
        return cls._from_computed(quaternion_to_rotmat(quaternion, usage), usage, dtype)

    @classmethod
    def _from_computed(cls, matrix: FLOAT_ARRAY, usage: Usage, dtype: SCALAR_TYPE_LIKE) -> Self:
        """
        Build a rotation matrix from a matrix computed by this package rather than supplied by a user.

        Round off drift (which builds up quickly in float32) is projected out instead of raising once it exceeds
        :attr:`.RotationOptions.orthonormality_tolerance`.
        """

        out = cls.__new__(cls)
        out._set_tags(usage, dtype)

        matrix = np.array(matrix, dtype=out.dtype)

        if np.abs(matrix @ matrix.T - np.eye(3)).max() > get_rotation_options().orthonormality_tolerance:
            matrix = orthonormalize_matrix(matrix)

        out._matrix = _freeze(matrix)

        return out

    def _compose(self, other: Self) -> Self:
        # R_p = R_a^T makes the plain product the right composition for both usages
        return self._from_computed(self._matrix @ other.matrix, self.usage, self.dtype)

    def inverted(self) -> Self:
        """
        Return the inverse rotation, the transposed matrix.
        """

        return self._from_computed(self._matrix.T, self.usage, self.dtype)

    def rotate(self, vector: ARRAY_LIKE) -> FLOAT_ARRAY:
        return self._matrix @ _check_vector_array_and_shape(vector, self.dtype)

    def get_unique(self) -> Self:
        """
        Return the matrix re-orthonormalized to remove accumulated round off.

        Rotation matrices are unique, so apart from the drift correction this is the identity operation.
        """

        return type(self)(self._matrix, usage=self.usage, dtype=self.dtype, orthonormalize=True)
