"""
This module defines the usage convention tag that every rotation in rotkit carries, along with the helpers that manage
the scalar precision of the rotation values.

A rotation can be used in one of two ways:

* :attr:`Usage.ACTIVE` rotations transform the coordinates of a vector inside a fixed reference frame.
* :attr:`Usage.PASSIVE` rotations re-express a fixed vector in a rotated reference frame.

For the same rotation instance the quaternion, angle-axis, rotation vector and Euler angle values are numerically
identical in both usages.  Only the rotation matrix differs, with :math:`\\mathbf{R}_p=\\mathbf{R}_a^T`.
"""

from enum import Enum

import numpy as np

from rotkit._typing import SCALAR_TYPE_LIKE


__all__ = ['Usage', 'SUPPORTED_SCALAR_TYPES', 'check_scalar_type']


class Usage(Enum):
    """
    The usage convention of a rotation.
    """

    ACTIVE = "active"
    """
    The rotation transforms a vector in a fixed frame.
    """

    PASSIVE = "passive"
    """
    The rotation transforms the reference frame and leaves the vector in place.
    """


SUPPORTED_SCALAR_TYPES: tuple[np.dtype, ...] = (np.dtype(np.float32), np.dtype(np.float64))
"""
The numpy scalar types a rotation can be stored in (single and double precision).
"""


def check_scalar_type(dtype: SCALAR_TYPE_LIKE) -> np.dtype:
    """
    Interpret the requested scalar type and ensure it is single or double precision.

    :param dtype: anything that :func:`numpy.dtype` understands
    :return: the numpy dtype
    :raises ValueError: if the scalar type is not float32 or float64
    """

    try:
        checked = np.dtype(dtype)
    except TypeError as err:
        raise ValueError(f'{dtype!r} is not a scalar type') from err

    if checked not in SUPPORTED_SCALAR_TYPES:
        raise ValueError(f'Rotations can only be stored as float32 or float64, not {checked}')

    return checked
