"""
The conversion engine between rotation representations.

Direct formulas only exist between the quaternion hub and each other representation (see
:mod:`rotkit.rotations.core.conversions`).  Every conversion is therefore a trip ``A -> quaternion -> B``: the source
provides :meth:`~.RotationLike.as_quaternion_array` and the target class provides
:meth:`~.RotationLike.from_quaternion_array`.  The engine only relies on the :class:`.RotationLike` protocol, so any
class implementing it can take part.
"""

from typing import TypeVar

from rotkit._typing import SCALAR_TYPE_LIKE

from rotkit.rotations.rotation_base import RotationLike
from rotkit.rotations.usage import check_scalar_type


__all__ = ['convert']


RotationT = TypeVar('RotationT', bound=RotationLike)


def convert(rotation: RotationLike, target_type: type[RotationT], dtype: SCALAR_TYPE_LIKE | None = None) -> RotationT:
    """
    Convert a rotation into another representation.

    The usage convention of `rotation` is carried over.  The input is never modified and the result always satisfies
    the invariant of the target representation (it is built through the target's constructor).  Converting to the same
    representation and scalar type returns the input itself, which is safe because rotations are immutable.

    For example::

        >>> from rotkit.rotations import convert, RotationQuaternion, RotationMatrix
        >>> from numpy import sqrt, float32
        >>> convert(RotationQuaternion(1/sqrt(2), 1/sqrt(2), 0, 0), RotationMatrix, float32).matrix
        array([[ 1.,  0.,  0.],
               [ 0.,  0., -1.],
               [ 0.,  1.,  0.]], dtype=float32)

    :param rotation: the rotation to convert
    :param target_type: the representation class to convert to
    :param dtype: the scalar type of the result.  ``None`` keeps the scalar type of `rotation`.  Changing the scalar
                  type is an explicit, possibly lossy, cast
    :return: the converted rotation
    :raises TypeError: if `rotation` is not a rotation
    """

    if not isinstance(rotation, RotationLike):
        raise TypeError(f'Cannot convert {rotation!r}, it is not a rotation')

    dtype = rotation.dtype if dtype is None else check_scalar_type(dtype)

    if type(rotation) is target_type:
        if dtype == rotation.dtype:
            return rotation  # type: ignore

        return rotation.astype(dtype)  # type: ignore

    return target_type.from_quaternion_array(rotation.as_quaternion_array(), rotation.usage, dtype)
