# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Core conversion routines for rotation representations

This module contains the closed form conversions between the quaternion hub and every other rotation representation,
along with the canonicalization of the angle based representations.  All routines are implemented purely on numpy
arrays (or array like objects) and return new arrays; inputs are never modified.

Quaternions are ordered scalar first, :math:`[w, x, y, z]`.  Rotation matrices are returned in the requested
:class:`.Usage`; the quaternion, angle-axis, rotation vector and Euler angle forms do not depend on the usage.

The numerical singularities are handled as follows:

* near a zero rotation the angle and axis are extracted without dividing by a vanishing sine, switching to the
  Taylor series forms below :attr:`.RotationOptions.small_angle_threshold`;
* a zero rotation gets the default axis :data:`DEFAULT_AXIS`;
* at a rotation of pi the two antipodal axes are resolved by making the largest magnitude component of the axis
  positive (the earliest index wins ties).
"""

import logging

import numpy as np

from rotkit._typing import ARRAY_LIKE, FLOAT_ARRAY, EULER_ORDERS

from rotkit.rotations.core._helpers import (_check_matrix_array_and_shape, _check_quaternion_array_and_shape,
                                            _check_vector_array_and_shape)
from rotkit.rotations.core.elementals import rot_x, rot_y, rot_z, skew
from rotkit.rotations.core.quaternion_math import quaternion_normalize
from rotkit.rotations.options import get_rotation_options
from rotkit.rotations.usage import Usage


__all__ = ['DEFAULT_AXIS',
           'quaternion_to_rotmat', 'rotmat_to_quaternion',
           'quaternion_to_angle_axis', 'angle_axis_to_quaternion',
           'quaternion_to_rotvec', 'rotvec_to_quaternion',
           'quaternion_to_euler', 'euler_to_quaternion', 'euler_to_rotmat', 'rotmat_to_euler',
           'angle_axis_unique', 'rotvec_unique']


_LOGGER: logging.Logger = logging.getLogger(__name__)


DEFAULT_AXIS: tuple[float, float, float] = (1.0, 0.0, 0.0)
"""
The axis used when the rotation angle is zero and the axis is therefore undefined.
"""


def _float_dtype(array: ARRAY_LIKE) -> np.dtype:
    if isinstance(array, np.ndarray) and array.dtype.kind == 'f':
        return array.dtype
    return np.dtype(np.float64)


def _small_angle_threshold(small_angle_threshold: float | None) -> float:
    if small_angle_threshold is None:
        return get_rotation_options().small_angle_threshold
    return small_angle_threshold


def _positive_scalar(quaternion: FLOAT_ARRAY) -> FLOAT_ARRAY:
    # the rotation angle of a quaternion with w >= 0 is in [0, pi]
    if quaternion[0] < 0:
        return -quaternion
    return quaternion


def quaternion_to_rotmat(quaternion: ARRAY_LIKE, usage: Usage = Usage.ACTIVE) -> FLOAT_ARRAY:
    r"""
    This function converts a unit rotation quaternion into its equivalent rotation matrix.

    The active rotation matrix is formed by using:

    .. math::
        \mathbf{q}=\left[\begin{array}{c} w \\ \mathbf{q}_v\end{array}\right] \\
        \mathbf{R}_a = (w^2-\mathbf{q}_v^T\mathbf{q}_v)\mathbf{I}_{3\times 3}+2\mathbf{q}_v\mathbf{q}_v^T+2w
        \left[\mathbf{q}_v\times\right]

    where :math:`\left[\bullet\times\right]` is the skew symmetric cross product matrix (see :func:`.skew`).  The
    passive matrix is the transpose, :math:`\mathbf{R}_p=\mathbf{R}_a^T`.  For example::

        >>> from rotkit.rotations import quaternion_to_rotmat, Usage
        >>> from numpy import sqrt
        >>> quaternion_to_rotmat([1/sqrt(2), 1/sqrt(2), 0, 0])
        array([[ 1.,  0.,  0.],
               [ 0.,  0., -1.],
               [ 0.,  1.,  0.]])
        >>> quaternion_to_rotmat([1/sqrt(2), 1/sqrt(2), 0, 0], Usage.PASSIVE)
        array([[ 1.,  0.,  0.],
               [ 0.,  0.,  1.],
               [ 0., -1.,  0.]])

    (up to round off in the printed zeros).

    :param quaternion: The unit rotation quaternion to be converted
    :param usage: The usage convention of the returned matrix
    :return: the rotation matrix
    """

    quaternion = _check_quaternion_array_and_shape(quaternion, _float_dtype(quaternion))

    # extract the scalar and vector portion of the quaternion
    qs = quaternion[0]
    qv = quaternion[1:]

    matrix = (qs ** 2 - qv @ qv) * np.eye(3, dtype=quaternion.dtype) + 2 * np.outer(qv, qv) + 2 * qs * skew(qv)

    if usage is Usage.PASSIVE:
        return matrix.T.copy()

    return matrix


def rotmat_to_quaternion(rotation_matrix: ARRAY_LIKE, usage: Usage = Usage.ACTIVE) -> FLOAT_ARRAY:
    r"""
    This function converts a rotation matrix into a unit rotation quaternion using Shepperd's method.

    The largest of :math:`4w^2, 4x^2, 4y^2, 4z^2` is computed from the trace and the diagonal, and the remaining
    components are recovered from the symmetric and skew symmetric parts of the (active) matrix divided by it.  This
    keeps the divisor away from zero for every rotation, including rotations by pi.  For instance, when the trace is
    positive:

    .. math::
        w = \frac{1}{2}\sqrt{1+\text{Tr}(\mathbf{R})}\qquad
        \mathbf{q}_v = \frac{1}{4w}\left[\begin{array}{c}r_{32}-r_{23}\\
        r_{13}-r_{31}\\
        r_{21}-r_{12}\end{array}\right]

    The sign of the returned quaternion is not canonicalized.

    :param rotation_matrix: The rotation matrix to convert
    :param usage: The usage convention of the input matrix
    :return: the unit rotation quaternion
    """

    rotation_matrix = _check_matrix_array_and_shape(rotation_matrix, _float_dtype(rotation_matrix))

    if usage is Usage.PASSIVE:
        rotation_matrix = rotation_matrix.T

    r = rotation_matrix

    trace = np.trace(r)

    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1)
        quaternion = [0.25 / s,
                      (r[2, 1] - r[1, 2]) * s,
                      (r[0, 2] - r[2, 0]) * s,
                      (r[1, 0] - r[0, 1]) * s]
    elif r[0, 0] > r[1, 1] and r[0, 0] > r[2, 2]:
        s = 2 * np.sqrt(1 + r[0, 0] - r[1, 1] - r[2, 2])
        quaternion = [(r[2, 1] - r[1, 2]) / s,
                      0.25 * s,
                      (r[0, 1] + r[1, 0]) / s,
                      (r[0, 2] + r[2, 0]) / s]
    elif r[1, 1] > r[2, 2]:
        s = 2 * np.sqrt(1 + r[1, 1] - r[0, 0] - r[2, 2])
        quaternion = [(r[0, 2] - r[2, 0]) / s,
                      (r[0, 1] + r[1, 0]) / s,
                      0.25 * s,
                      (r[1, 2] + r[2, 1]) / s]
    else:
        s = 2 * np.sqrt(1 + r[2, 2] - r[0, 0] - r[1, 1])
        quaternion = [(r[1, 0] - r[0, 1]) / s,
                      (r[0, 2] + r[2, 0]) / s,
                      (r[1, 2] + r[2, 1]) / s,
                      0.25 * s]

    return quaternion_normalize(np.array(quaternion, dtype=rotation_matrix.dtype))


def quaternion_to_angle_axis(quaternion: ARRAY_LIKE,
                             small_angle_threshold: float | None = None) -> tuple[float, FLOAT_ARRAY]:
    r"""
    This function converts a unit rotation quaternion into an angle and a unit axis.

    The quaternion is first flipped onto the :math:`w\geq 0` hemisphere so that the angle is in :math:`[0, \pi]`.  Then

    .. math::
        \theta = 2\,\text{atan2}(\left\|\mathbf{q}_v\right\|, w) \\
        \hat{\mathbf{x}} = \frac{\mathbf{q}_v}{\left\|\mathbf{q}_v\right\|}

    which never divides by :math:`\text{sin}(\theta/2)`.  When :math:`\left\|\mathbf{q}_v\right\|` is below the small
    angle threshold the angle uses the first order expansion :math:`\theta\approx 2\left\|\mathbf{q}_v\right\|/w`, and
    when it is exactly zero the axis is :data:`DEFAULT_AXIS`.

    :param quaternion: the unit rotation quaternion
    :param small_angle_threshold: the threshold for the small angle expansion.  ``None`` uses the value from
                                  :func:`.get_rotation_options`
    :return: the rotation angle in radians and the unit rotation axis
    """

    quaternion = _positive_scalar(_check_quaternion_array_and_shape(quaternion, _float_dtype(quaternion)))

    threshold = _small_angle_threshold(small_angle_threshold)

    qs = quaternion[0]
    qv = quaternion[1:]

    sin_half = np.linalg.norm(qv)

    if sin_half == 0:
        return 0.0, np.array(DEFAULT_AXIS, dtype=quaternion.dtype)

    if sin_half < threshold:
        angle = 2 * sin_half / qs
    else:
        angle = 2 * np.arctan2(sin_half, qs)

    return float(angle), qv / sin_half


def angle_axis_to_quaternion(angle: float, axis: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    This function converts a rotation angle and unit axis into a unit rotation quaternion.

    .. math::
        \mathbf{q} = \left[\begin{array}{c} \text{cos}(\frac{\theta}{2}) \\
        \text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\end{array}\right]

    :param angle: the rotation angle in radians
    :param axis: the unit rotation axis
    :return: the unit rotation quaternion
    """

    axis = _check_vector_array_and_shape(axis, _float_dtype(axis))

    half = angle / 2

    return np.concatenate([[np.cos(half)], np.sin(half) * axis]).astype(axis.dtype)


def quaternion_to_rotvec(quaternion: ARRAY_LIKE, small_angle_threshold: float | None = None) -> FLOAT_ARRAY:
    r"""
    This function converts a unit rotation quaternion into a rotation vector :math:`\mathbf{v}=\theta\hat{\mathbf{x}}`.

    After flipping the quaternion onto the :math:`w\geq 0` hemisphere the rotation vector is a scaled copy of the
    vector part of the quaternion:

    .. math::
        \mathbf{v} = \frac{2\,\text{atan2}(\left\|\mathbf{q}_v\right\|, w)}{\left\|\mathbf{q}_v\right\|}\mathbf{q}_v

    Below the small angle threshold the scale factor is replaced by its Taylor expansion

    .. math::
        \frac{2}{w}\left(1-\frac{\left\|\mathbf{q}_v\right\|^2}{3w^2}\right)

    so that the identity quaternion maps smoothly onto the zero vector.

    :param quaternion: the unit rotation quaternion
    :param small_angle_threshold: the threshold for the small angle expansion.  ``None`` uses the value from
                                  :func:`.get_rotation_options`
    :return: the rotation vector with a norm in :math:`[0, \pi]`
    """

    quaternion = _positive_scalar(_check_quaternion_array_and_shape(quaternion, _float_dtype(quaternion)))

    threshold = _small_angle_threshold(small_angle_threshold)

    qs = quaternion[0]
    qv = quaternion[1:]

    sin_half = np.linalg.norm(qv)

    if sin_half < threshold:
        scale = 2 / qs * (1 - sin_half ** 2 / (3 * qs ** 2))
    else:
        scale = 2 * np.arctan2(sin_half, qs) / sin_half

    return (scale * qv).astype(quaternion.dtype)


def rotvec_to_quaternion(rot_vec: ARRAY_LIKE, small_angle_threshold: float | None = None) -> FLOAT_ARRAY:
    r"""
    This function converts a rotation vector into a unit rotation quaternion.

    The quaternion is formed by:

    .. math::
        \theta = \left\|\mathbf{v}\right\| \\
        \mathbf{q} = \left[\begin{array}{c} \text{cos}(\frac{\theta}{2}) \\
        \frac{\text{sin}(\frac{\theta}{2})}{\theta}\mathbf{v}\end{array}\right]

    Below the small angle threshold :math:`\frac{\text{sin}(\theta/2)}{\theta}` is replaced by
    :math:`\frac{1}{2}-\frac{\theta^2}{48}` so the zero vector maps onto the identity quaternion.

    :param rot_vec: The rotation vector to convert
    :param small_angle_threshold: the threshold for the small angle expansion.  ``None`` uses the value from
                                  :func:`.get_rotation_options`
    :return: the unit rotation quaternion
    """

    rot_vec = _check_vector_array_and_shape(rot_vec, _float_dtype(rot_vec))

    threshold = _small_angle_threshold(small_angle_threshold)

    theta = np.linalg.norm(rot_vec)

    if theta < threshold:
        scale = 0.5 - theta ** 2 / 48
    else:
        scale = np.sin(theta / 2) / theta

    return np.concatenate([[np.cos(theta / 2)], scale * rot_vec]).astype(rot_vec.dtype)


def _pi_axis_tie_break(axis: FLOAT_ARRAY) -> FLOAT_ARRAY:
    if axis[np.argmax(np.abs(axis))] < 0:
        return -axis
    return axis


def angle_axis_unique(angle: float, axis: ARRAY_LIKE,
                      angle_tolerance: float | None = None) -> tuple[float, FLOAT_ARRAY]:
    r"""
    Return the canonical angle and axis for a rotation.

    The angle is wrapped into :math:`[0, \pi]`.  A negative wrapped angle is replaced by its absolute value with the
    axis flipped, which describes the same rotation.  An angle within `angle_tolerance` of :math:`\pi` is set to exactly
    :math:`\pi` and the axis is flipped if needed so that its largest magnitude component is positive (the earliest
    index wins if several components share the largest magnitude).  A wrapped angle of exactly zero gets
    :data:`DEFAULT_AXIS`.

    :param angle: the rotation angle in radians
    :param axis: the unit rotation axis
    :param angle_tolerance: the tolerance for snapping to pi.  ``None`` uses the value from
                            :func:`.get_rotation_options`
    :return: the canonical angle and axis
    """

    axis = _check_vector_array_and_shape(axis, _float_dtype(axis))

    if angle_tolerance is None:
        angle_tolerance = get_rotation_options().angle_tolerance

    # wrap into [-pi, pi)
    wrapped = float(np.mod(float(angle) + np.pi, 2 * np.pi) - np.pi)

    if wrapped < 0:
        wrapped = -wrapped
        axis = -axis

    if abs(wrapped - np.pi) <= angle_tolerance:
        return np.pi, _pi_axis_tie_break(axis)

    if wrapped == 0:
        return 0.0, np.array(DEFAULT_AXIS, dtype=axis.dtype)

    return wrapped, axis


def rotvec_unique(rot_vec: ARRAY_LIKE, angle_tolerance: float | None = None) -> FLOAT_ARRAY:
    """
    Return the canonical rotation vector, whose norm is in :math:`[0, \\pi]`.

    The same wrapping and tie-break as :func:`angle_axis_unique` are applied directly to the vector: the vector is
    shortened by whole turns and flipped when the wrapped angle is negative.

    :param rot_vec: the rotation vector
    :param angle_tolerance: the tolerance for snapping to pi.  ``None`` uses the value from
                            :func:`.get_rotation_options`
    :return: the canonical rotation vector
    """

    rot_vec = _check_vector_array_and_shape(rot_vec, _float_dtype(rot_vec))

    theta = np.linalg.norm(rot_vec)

    if theta == 0:
        return rot_vec

    angle, axis = angle_axis_unique(theta, rot_vec / theta, angle_tolerance)

    return (angle * axis).astype(rot_vec.dtype)


_ELEMENTALS = {'x': rot_x, 'y': rot_y, 'z': rot_z}


def euler_to_rotmat(angles: ARRAY_LIKE, order: EULER_ORDERS = 'zyx') -> FLOAT_ARRAY:
    r"""
    This function converts a sequence of 3 Euler angles into the active rotation matrix.

    The angles are applied as an intrinsic sequence in the order given, which means the matrices are multiplied left to
    right.  For ``order='zyx'`` with angles (yaw, pitch, roll)

    .. math::
        \mathbf{R}_a = \mathbf{R}_z(\psi)\mathbf{R}_y(\theta)\mathbf{R}_x(\phi)

    and for ``order='xyz'`` :math:`\mathbf{R}_a = \mathbf{R}_x(a)\mathbf{R}_y(b)\mathbf{R}_z(c)`.

    :param angles: The Euler angles in radians, in the same order as `order`
    :param order: The axis sequence
    :return: The active rotation matrix formed by the Euler angles
    :raises ValueError: When ``order`` contains a character that is not x, y, or z
    """

    angles = _check_vector_array_and_shape(angles, _float_dtype(angles))

    rotation = np.eye(3, dtype=angles.dtype)

    for angle, axis in zip(angles, order.lower()):

        try:
            elemental = _ELEMENTALS[axis]
        except KeyError:
            raise ValueError('Order must only include x, y, and z.  You entered a {} character'.format(axis))

        rotation = rotation @ elemental(angle, angles.dtype)

    return rotation


def _half_open_angle(angle: float) -> float:
    # arctan2 returns -pi for a negative zero numerator; (-pi, pi] keeps +pi.  Adding 0.0 turns -0.0 into 0.0
    if angle <= -np.pi:
        return np.pi

    return angle + 0.0


def rotmat_to_euler(matrix: ARRAY_LIKE, order: EULER_ORDERS = 'zyx',
                    small_angle_threshold: float | None = None) -> FLOAT_ARRAY:
    """
    This function converts an active rotation matrix to the 3 Euler angles of the requested sequence.

    See :func:`euler_to_rotmat` for the definition of the sequences.  The first and last angles are returned in
    :math:`(-\\pi, \\pi]` and the middle angle in :math:`[-\\pi/2, \\pi/2]`.  When the cosine of the middle angle is
    below the small angle threshold the first and last axes are aligned (gimbal lock); the last angle is then set to 0
    and the whole rotation about the aligned axis is assigned to the first angle.

    :param matrix: The active rotation matrix
    :param order: The axis sequence, 'zyx' or 'xyz'
    :param small_angle_threshold: The threshold for detecting gimbal lock.  ``None`` uses the value from
                                  :func:`.get_rotation_options`
    :return: The Euler angles in the same order as `order`
    :raises ValueError: if the order is not supported
    """

    r = _check_matrix_array_and_shape(matrix, _float_dtype(matrix))

    threshold = _small_angle_threshold(small_angle_threshold)

    fixed_order = order.lower()

    if fixed_order == 'zyx':

        cos_middle = np.hypot(r[0, 0], r[1, 0])
        middle = np.arctan2(-r[2, 0], cos_middle)

        if cos_middle < threshold:
            _LOGGER.debug('gimbal lock encountered converting to zyx euler angles, setting roll to 0')
            first = np.arctan2(-r[0, 1], r[1, 1])
            last = 0.0
        else:
            first = np.arctan2(r[1, 0], r[0, 0])
            last = np.arctan2(r[2, 1], r[2, 2])

    elif fixed_order == 'xyz':

        cos_middle = np.hypot(r[0, 0], r[0, 1])
        middle = np.arctan2(r[0, 2], cos_middle)

        if cos_middle < threshold:
            _LOGGER.debug('gimbal lock encountered converting to xyz euler angles, setting the z angle to 0')
            first = np.arctan2(r[2, 1], r[1, 1])
            last = 0.0
        else:
            first = np.arctan2(-r[1, 2], r[2, 2])
            last = np.arctan2(-r[0, 1], r[0, 0])

    else:
        raise ValueError('Invalid order {}.  Only zyx and xyz are supported'.format(order))

    return np.array([_half_open_angle(first), middle + 0.0, _half_open_angle(last)], dtype=r.dtype)


def euler_to_quaternion(angles: ARRAY_LIKE, order: EULER_ORDERS = 'zyx') -> FLOAT_ARRAY:
    """
    This function converts Euler angles into a unit rotation quaternion.

    This is done through a call to :func:`euler_to_rotmat` followed by a call to :func:`rotmat_to_quaternion`.

    :param angles: The angles to convert
    :param order: the order of the angles
    :returns: The unit rotation quaternion
    """

    return rotmat_to_quaternion(euler_to_rotmat(angles, order))


def quaternion_to_euler(quaternion: ARRAY_LIKE, order: EULER_ORDERS = 'zyx',
                        small_angle_threshold: float | None = None) -> FLOAT_ARRAY:
    """
    This function converts a unit rotation quaternion to 3 Euler angles in the requested order.

    This works by first converting the quaternion to the active rotation matrix using :func:`quaternion_to_rotmat`
    and then using :func:`rotmat_to_euler` to find the Euler angles.

    :param quaternion: The quaternion to be converted to Euler angles
    :param order: The order of the rotations
    :param small_angle_threshold: The threshold for detecting gimbal lock
    :return: The Euler angles corresponding to the rotation quaternion
    """

    return rotmat_to_euler(quaternion_to_rotmat(quaternion), order, small_angle_threshold)
