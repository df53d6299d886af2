
import numpy as np

from rotkit._typing import ARRAY_LIKE, FLOAT_ARRAY
from rotkit.rotations.core._helpers import _check_vector_array_and_shape


__all__ = ["rot_x", "rot_y", "rot_z", "skew"]


def rot_x(theta: float, dtype: np.dtype | type = np.float64) -> FLOAT_ARRAY:
    r"""
    This function returns the active rotation matrix for a right handed rotation about the x axis by angle theta.

    Mathematically this rotation is defined as:

    .. math::
        \mathbf{R}_x(\theta)=\left[\begin{array}{ccc} 1 & 0 & 0 \\
        0 & \text{cos}(\theta) & -\text{sin}(\theta) \\
        0 & \text{sin}(\theta) & \text{cos}(\theta) \end{array}\right]

    For example::

        >>> from rotkit.rotations import rot_x
        >>> rot_x(0.5)
        array([[ 1.        ,  0.        ,  0.        ],
               [ 0.        ,  0.87758256, -0.47942554],
               [ 0.        ,  0.47942554,  0.87758256]])

    The passive matrix for the same rotation is the transpose.

    :param theta: The angle to rotate by in radians
    :param dtype: The scalar type of the returned matrix
    :return: The active rotation matrix
    """

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    return np.array([[1, 0, 0],
                     [0, ctheta, -stheta],
                     [0, stheta, ctheta]], dtype=dtype)


def rot_y(theta: float, dtype: np.dtype | type = np.float64) -> FLOAT_ARRAY:
    r"""
    This function returns the active rotation matrix for a right handed rotation about the y axis by angle theta.

    This rotation is defined as:

    .. math::
        \mathbf{R}_y(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & 0 & \text{sin}(\theta) \\
        0 & 1 & 0 \\
        -\text{sin}(\theta) & 0 & \text{cos}(\theta) \end{array}\right]

    :param theta: The angle to rotate by in radians
    :param dtype: The scalar type of the returned matrix
    :return: The active rotation matrix
    """

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    return np.array([[ctheta, 0, stheta],
                     [0, 1, 0],
                     [-stheta, 0, ctheta]], dtype=dtype)


def rot_z(theta: float, dtype: np.dtype | type = np.float64) -> FLOAT_ARRAY:
    r"""
    This function returns the active rotation matrix for a right handed rotation about the z axis by angle theta.

    This rotation is defined as:

    .. math::
        \mathbf{R}_z(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & -\text{sin}(\theta) & 0\\
        \text{sin}(\theta) & \text{cos}(\theta) & 0 \\
        0 & 0 & 1 \end{array}\right]

    :param theta: The angle to rotate by in radians
    :param dtype: The scalar type of the returned matrix
    :return: The active rotation matrix
    """

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    return np.array([[ctheta, -stheta, 0],
                     [stheta, ctheta, 0],
                     [0, 0, 1]], dtype=dtype)


def skew(vector: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    This function returns the skew symmetric cross product matrix of a 3 element vector.

    The skew symmetric matrix is defined such that :math:`\left[\mathbf{x}\times\right]\mathbf{y}=
    \mathbf{x}\times\mathbf{y}`:

    .. math::
        \left[\mathbf{x}\times\right] = \left[\begin{array}{ccc} 0 & -x_3 & x_2 \\
        x_3 & 0 & -x_1 \\
        -x_2 & x_1 & 0 \end{array}\right]

    The scalar type of the input is preserved when it is a numpy floating point array.

    :param vector: the vector to form the skew symmetric matrix of
    :return: the skew symmetric matrix
    """

    dtype = vector.dtype if isinstance(vector, np.ndarray) and vector.dtype.kind == 'f' else np.float64

    x, y, z = _check_vector_array_and_shape(vector, dtype)

    return np.array([[0, -z, y],
                     [z, 0, -x],
                     [-y, x, 0]], dtype=dtype)
