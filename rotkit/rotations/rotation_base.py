# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module provides the interface shared by every rotation representation and the operators built on top of it.

The :class:`RotationLike` protocol is the capability set the conversion engine relies on.  Any object offering

* ``usage`` and ``dtype``,
* ``as_quaternion_array()`` (conversion into the quaternion hub),
* ``from_quaternion_array(quaternion, usage, dtype)`` (conversion out of the hub, a class method),
* ``compose(other)``, ``inverted()`` and ``get_unique()``

can be converted to and composed with the representations in this package.

The :class:`RotationOperators` mixin implements the operators (``*``, ``==``, :meth:`~RotationOperators.is_near`,
:meth:`~RotationOperators.rotate`, ...) once in terms of that capability set.  The representations only provide the
storage specific pieces.

Composition is always written ``a * b`` and means "rotate by ``b``, then by ``a``", so that
``(a * b).rotate(v) == a.rotate(b.rotate(v))`` for both usages.  The result has the representation of ``a``;
``b`` is converted first if it is a different representation.  Operands must share their :class:`.Usage` and scalar
type, otherwise :class:`.UsageMismatchError` or :class:`.PrecisionMismatchError` is raised.
"""

from abc import ABCMeta, abstractmethod
from typing import Protocol, Self, Any, runtime_checkable

import numpy as np

from rotkit._typing import ARRAY_LIKE, FLOAT_ARRAY, SCALAR_TYPE_LIKE

from rotkit.rotations.core._helpers import _check_vector_array_and_shape
from rotkit.rotations.core.conversions import quaternion_to_rotvec, rotvec_to_quaternion
from rotkit.rotations.core.quaternion_math import (compose_quaternions, quaternion_inverse, quaternion_rotate,
                                                   quaternion_unique)
from rotkit.rotations.exceptions import PrecisionMismatchError, UsageMismatchError
from rotkit.rotations.usage import Usage, check_scalar_type


__all__ = ['RotationLike', 'RotationOperators']


@runtime_checkable
class RotationLike(Protocol):
    """
    The capability set every rotation representation provides.
    """

    @property
    def usage(self) -> Usage: ...

    @property
    def dtype(self) -> np.dtype: ...

    def as_quaternion_array(self) -> FLOAT_ARRAY: ...

    @classmethod
    def from_quaternion_array(cls, quaternion: ARRAY_LIKE, usage: Usage, dtype: SCALAR_TYPE_LIKE) -> Self: ...

    def compose(self, other: 'RotationLike') -> Self: ...

    def inverted(self) -> Self: ...

    def get_unique(self) -> Self: ...


class RotationOperators(metaclass=ABCMeta):
    """
    Operators shared by all rotation representations.

    Subclasses store their data in read-only numpy arrays and must implement :meth:`as_quaternion_array`,
    :meth:`from_quaternion_array`, :meth:`to_stored_implementation`, :meth:`from_stored_implementation` and
    :meth:`get_unique`.  They may override :meth:`_compose`, :meth:`inverted` and :meth:`rotate` where a direct
    formula exists.
    """

    _usage: Usage
    _dtype: np.dtype

    def _set_tags(self, usage: Usage, dtype: SCALAR_TYPE_LIKE):

        if not isinstance(usage, Usage):
            raise TypeError(f'usage must be a Usage, got {usage!r}')

        self._usage = usage
        self._dtype = check_scalar_type(dtype)

    @property
    def usage(self) -> Usage:
        """
        The usage convention (ACTIVE or PASSIVE) of this rotation.  This is fixed at construction.
        """

        return self._usage

    @property
    def dtype(self) -> np.dtype:
        """
        The scalar type (float32 or float64) the rotation is stored in.  This is fixed at construction.
        """

        return self._dtype

    # representation specific pieces

    @abstractmethod
    def as_quaternion_array(self) -> FLOAT_ARRAY:
        """
        Convert this rotation into a unit quaternion array ``[w, x, y, z]`` in the scalar type of this rotation.
        """

    @classmethod
    @abstractmethod
    def from_quaternion_array(cls, quaternion: ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                              dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        """
        Build this representation from a unit quaternion array ``[w, x, y, z]``.
        """

    @abstractmethod
    def to_stored_implementation(self) -> FLOAT_ARRAY:
        """
        Return a copy of the numbers this representation stores.
        """

    @classmethod
    @abstractmethod
    def from_stored_implementation(cls, stored: ARRAY_LIKE, usage: Usage = Usage.ACTIVE,
                                   dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        """
        Build this representation from the numbers returned by :meth:`to_stored_implementation`.
        """

    @abstractmethod
    def get_unique(self) -> Self:
        """
        Return the canonical representative of this rotation in this representation.
        """

    # shared operators

    @classmethod
    def identity(cls, usage: Usage = Usage.ACTIVE, dtype: SCALAR_TYPE_LIKE = np.float64) -> Self:
        """
        Return the identity rotation (no rotation) in this representation.

        :param usage: the usage convention of the rotation
        :param dtype: the scalar type of the rotation
        :return: the identity rotation
        """

        return cls.from_quaternion_array(np.array([1.0, 0.0, 0.0, 0.0]), usage, dtype)

    @classmethod
    def from_rotation(cls, rotation: RotationLike, dtype: SCALAR_TYPE_LIKE | None = None) -> Self:
        """
        Convert any rotation into this representation, keeping its usage.

        :param rotation: the rotation to convert
        :param dtype: the scalar type of the result.  ``None`` keeps the scalar type of `rotation`
        :return: the converted rotation
        """

        # avoid a circular import, the engine only relies on RotationLike
        from rotkit.rotations.conversion import convert

        return convert(rotation, cls, dtype)

    def to(self, target_type: type, dtype: SCALAR_TYPE_LIKE | None = None) -> Any:
        """
        Convert this rotation into another representation.

        :param target_type: the class of the representation to convert to
        :param dtype: the scalar type of the result.  ``None`` keeps the scalar type of this rotation
        :return: the converted rotation
        """

        from rotkit.rotations.conversion import convert

        return convert(self, target_type, dtype)

    def astype(self, dtype: SCALAR_TYPE_LIKE) -> Self:
        """
        Explicitly cast this rotation to another scalar type.

        Casting from float64 to float32 loses precision.  Rotations are never cast implicitly.

        :param dtype: the scalar type to cast to
        :return: the cast rotation (``self`` if the scalar type already matches)
        """

        dtype = check_scalar_type(dtype)

        if dtype == self.dtype:
            return self

        return type(self).from_stored_implementation(self.to_stored_implementation().astype(dtype), self.usage, dtype)

    def _check_compatible(self, other: RotationLike):

        if other.usage is not self.usage:
            raise UsageMismatchError(f'Cannot combine a {self.usage.name} rotation with a {other.usage.name} rotation')

        if other.dtype != self.dtype:
            raise PrecisionMismatchError(f'Cannot combine a {self.dtype} rotation with a {other.dtype} rotation. '
                                         'Use astype to cast one of them first')

    def _same_representation(self, other: RotationLike) -> Self:

        self._check_compatible(other)

        if type(other) is type(self):
            return other  # type: ignore

        return type(self).from_quaternion_array(other.as_quaternion_array(), self.usage, self.dtype)

    def _compose(self, other: Self) -> Self:
        return type(self).from_quaternion_array(compose_quaternions(self.as_quaternion_array(),
                                                                    other.as_quaternion_array(),
                                                                    self.usage),
                                                self.usage, self.dtype)

    def compose(self, other: RotationLike) -> Self:
        """
        Compose this rotation with `other`, ``self * other``: rotate by `other` first, then by ``self``.

        The composition rule for each usage is documented in :func:`.compose_quaternions`.

        :param other: a rotation of any representation with the same usage and scalar type
        :return: the composed rotation in the representation of ``self``
        :raises UsageMismatchError: if the usages differ
        :raises PrecisionMismatchError: if the scalar types differ
        """

        return self._compose(self._same_representation(other))

    def __mul__(self, other: Any) -> Self:

        if isinstance(other, RotationLike):
            return self.compose(other)

        return NotImplemented

    def inverted(self) -> Self:
        """
        Return the inverse rotation as a new object.
        """

        return type(self).from_quaternion_array(quaternion_inverse(self.as_quaternion_array()), self.usage, self.dtype)

    def is_near(self, other: RotationLike, tol: float = 1e-6) -> bool:
        """
        Check whether `other` describes the same rotation as ``self`` within `tol`.

        The comparison is made on the canonical quaternions, so different encodings of the same rotation (a quaternion
        and its negation, angles that differ by whole turns) compare as near.

        :param other: a rotation of any representation with the same usage and scalar type
        :param tol: the largest accepted absolute difference of any quaternion component
        :return: ``True`` if the rotations are the same within the tolerance
        """

        self._check_compatible(other)

        q_self = quaternion_unique(self.as_quaternion_array())
        q_other = quaternion_unique(other.as_quaternion_array())

        # the canonical sign can still differ when w is (nearly) zero
        return bool(min(np.abs(q_self - q_other).max(), np.abs(q_self + q_other).max()) <= tol)

    def rotate(self, vector: ARRAY_LIKE) -> FLOAT_ARRAY:
        """
        Apply this rotation to a 3 element vector.

        For an ACTIVE rotation this rotates the vector inside the fixed frame.  For a PASSIVE rotation this returns the
        coordinates of the fixed vector in the rotated frame.  In matrix terms this is always the stored rotation
        matrix of the same usage times the vector.

        :param vector: the vector to rotate
        :return: the rotated vector in the scalar type of this rotation
        """

        vector = _check_vector_array_and_shape(vector, self.dtype)

        quaternion = self.as_quaternion_array()

        if self.usage is Usage.PASSIVE:
            quaternion = quaternion_inverse(quaternion)

        return quaternion_rotate(quaternion, vector)

    def inverse_rotate(self, vector: ARRAY_LIKE) -> FLOAT_ARRAY:
        """
        Apply the inverse of this rotation to a 3 element vector.

        :param vector: the vector to rotate
        :return: the rotated vector in the scalar type of this rotation
        """

        return self.inverted().rotate(vector)

    def box_plus(self, vector: ARRAY_LIKE) -> Self:
        """
        Perturb this rotation by a rotation vector, ``exp(vector) * self``.

        :param vector: the rotation vector of the perturbation
        :return: the perturbed rotation in this representation
        """

        perturbation = rotvec_to_quaternion(_check_vector_array_and_shape(vector, self.dtype))

        return type(self).from_quaternion_array(compose_quaternions(perturbation, self.as_quaternion_array(),
                                                                    self.usage),
                                                self.usage, self.dtype)

    def box_minus(self, other: RotationLike) -> FLOAT_ARRAY:
        """
        Return the rotation vector ``v`` such that ``other.box_plus(v)`` is this rotation.

        :param other: a rotation of any representation with the same usage and scalar type
        :return: the rotation vector of ``self * other.inverted()`` with a norm in [0, pi]
        """

        self._check_compatible(other)

        difference = compose_quaternions(self.as_quaternion_array(), quaternion_inverse(other.as_quaternion_array()),
                                         self.usage)

        return quaternion_to_rotvec(difference)

    def __eq__(self, other: Any) -> bool:

        if not isinstance(other, RotationLike):
            return NotImplemented

        other = self._same_representation(other)

        return bool(np.array_equal(self.to_stored_implementation(), other.to_stored_implementation()))

    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        return '{}({!r}, usage=Usage.{}, dtype={})'.format(type(self).__name__, self.to_stored_implementation(),
                                                           self.usage.name, self.dtype.name)

    def __str__(self) -> str:
        return str(self.to_stored_implementation())
