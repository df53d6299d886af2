"""
Quaternion algebra on plain numpy arrays.

Every quaternion in this module is a 4 element array ordered scalar first, :math:`[w, x, y, z]`.
"""

import numpy as np

from rotkit._typing import ARRAY_LIKE, FLOAT_ARRAY, DatetimeLike

from rotkit.rotations.core._helpers import _check_quaternion_array_and_shape, _check_vector_array_and_shape
from rotkit.rotations.exceptions import InvalidRotationError
from rotkit.rotations.usage import Usage

__all__ = ["quaternion_normalize", "quaternion_inverse", "quaternion_multiplication", "compose_quaternions",
           "quaternion_unique", "quaternion_rotate", "nlerp", "slerp"]


def _dtype_of(array: ARRAY_LIKE) -> np.dtype:
    if isinstance(array, np.ndarray) and array.dtype.kind == 'f':
        return array.dtype
    return np.dtype(np.float64)


def quaternion_normalize(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    """
    Normalizes the quaternion to unit length.

    The sign of the quaternion is left alone; use :func:`quaternion_unique` to pick the canonical sign.

    :param quaternion: the quaternion to normalize
    :returns: The normalized quaternion as a new array
    :raises InvalidRotationError: if the quaternion is zero or contains non-finite values
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion, _dtype_of(quaternion))

    norm = np.linalg.norm(work_quaternion)

    if not np.isfinite(norm) or norm == 0:
        raise InvalidRotationError(f'The quaternion {work_quaternion} cannot be normalized to a rotation')

    work_quaternion /= norm

    return work_quaternion


def quaternion_inverse(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    This function provides the inverse of a unit rotation quaternion.

    The inverse of a rotation quaternion is defined such that
    :math:`\mathbf{q}\otimes\mathbf{q}^{-1}=\mathbf{q}_I` where
    :math:`\mathbf{q}_I=\left[\begin{array}{cccc}1&0&0&0\end{array}\right]^T` is the identity quaternion.  For a unit
    quaternion this is the conjugate, which negates the vector portion:

    .. math::
        \mathbf{q}=\left[\begin{array}{c}\text{cos}(\frac{\theta}{2})\\
        \text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\end{array}\right]\qquad
        \mathbf{q}^{-1}=\left[\begin{array}{c}\text{cos}(\frac{\theta}{2})\\
        -\text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\end{array}\right]

    :param quaternion: The rotation quaternion to be inverted
    :return: a new array containing the inverse quaternion
    """

    # ensure the value is an array and break mutability
    quaternion = _check_quaternion_array_and_shape(quaternion, _dtype_of(quaternion))

    # negate the vector portion
    quaternion[1:] *= -1

    return quaternion


def quaternion_multiplication(quaternion_1_in: ARRAY_LIKE,
                              quaternion_2_in: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    This function performs the hamiltonian quaternion multiplication operation.

    Mathematically this is given by:

    .. math::
        \mathbf{q}_1\otimes\mathbf{q}_2=\left[\begin{array}{c}w_1w_2-\mathbf{v}_1^T\mathbf{v}_2\\
        w_1\mathbf{v}_2 + w_2\mathbf{v}_1 + \mathbf{v}_1\times\mathbf{v}_2\end{array}\right]

    For active rotations the product :math:`\mathbf{q}_1\otimes\mathbf{q}_2` applies :math:`\mathbf{q}_2` first and then
    :math:`\mathbf{q}_1`.  See :func:`compose_quaternions` for the usage aware composition.

    :param quaternion_1_in: The first quaternion to multiply
    :param quaternion_2_in: The second quaternion to multiply
    :return: The hamiltonian product of quaternion_1 and quaternion_2
    """

    quaternion_1 = _check_quaternion_array_and_shape(quaternion_1_in, _dtype_of(quaternion_1_in))
    quaternion_2 = _check_quaternion_array_and_shape(quaternion_2_in, _dtype_of(quaternion_2_in))

    w1 = quaternion_1[0]
    v1 = quaternion_1[1:]

    w2 = quaternion_2[0]
    v2 = quaternion_2[1:]

    return np.concatenate([[w1 * w2 - (v1 * v2).sum()],
                           w1 * v2 + w2 * v1 + np.cross(v1, v2)]).astype(np.result_type(quaternion_1, quaternion_2))


def compose_quaternions(lhs: ARRAY_LIKE, rhs: ARRAY_LIKE, usage: Usage) -> FLOAT_ARRAY:
    r"""
    Compose two rotation quaternions written as ``lhs * rhs`` according to the usage convention.

    The composition always means "rotate by ``rhs`` and then by ``lhs``" in the sense that
    ``(lhs * rhs).rotate(v) == lhs.rotate(rhs.rotate(v))``.  Because the passive rotation matrix of a quaternion is the
    transpose of the active one, this gives

    .. math::
        \text{ACTIVE}:\ \mathbf{q}_{lhs}\otimes\mathbf{q}_{rhs}\qquad
        \text{PASSIVE}:\ \mathbf{q}_{rhs}\otimes\mathbf{q}_{lhs}

    so that the quaternion composition always agrees with the rotation matrix product
    :math:`\mathbf{R}_{lhs}\mathbf{R}_{rhs}` of the same usage.

    :param lhs: the left hand operand
    :param rhs: the right hand operand
    :param usage: the usage convention shared by both operands
    :return: the quaternion of the composed rotation (not canonicalized)
    """

    if usage is Usage.ACTIVE:
        return quaternion_multiplication(lhs, rhs)

    return quaternion_multiplication(rhs, lhs)


def quaternion_unique(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    """
    Return the canonical representative of the double cover.

    The sign is chosen such that the scalar part is positive.  If the scalar part is exactly zero then the first nonzero
    element of the vector part is made positive.  Applying this twice returns the same array.

    :param quaternion: the quaternion to canonicalize
    :return: the canonical quaternion as a new array
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion, _dtype_of(quaternion))

    for component in work_quaternion:
        if component != 0:
            if component < 0:
                work_quaternion *= -1
            break

    return work_quaternion


def quaternion_rotate(quaternion: ARRAY_LIKE, vector: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    Actively rotate a 3 element vector by a unit quaternion, :math:`\mathbf{v}'=\mathbf{q}\mathbf{v}\mathbf{q}^*`.

    This is evaluated without forming the rotation matrix as

    .. math::
        \mathbf{t} = 2\mathbf{q}_v\times\mathbf{v}\\
        \mathbf{v}' = \mathbf{v} + w\mathbf{t} + \mathbf{q}_v\times\mathbf{t}

    Pass the inverse quaternion to apply the passive (frame) rotation.

    :param quaternion: the unit rotation quaternion
    :param vector: the vector to rotate
    :return: the rotated vector
    """

    quaternion = _check_quaternion_array_and_shape(quaternion, _dtype_of(quaternion))
    vector = _check_vector_array_and_shape(vector, quaternion.dtype)

    qv = quaternion[1:]

    temp = 2 * np.cross(qv, vector)

    return vector + quaternion[0] * temp + np.cross(qv, temp)


def _fractional_time(time: float | DatetimeLike, time0: float | DatetimeLike, time1: float | DatetimeLike) -> float:
    try:
        return float((time - time0) / (time1 - time0))  # type: ignore
    except TypeError:
        raise TypeError('time, time0, and time1 must support subtraction resulting in a type that supports true division.'
                        'Typically this means they should all be floats or all be DatetimeLike objects')


def nlerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1) -> FLOAT_ARRAY:
    r"""
    This function performs normalized linear interpolation of rotation quaternions.

    NLERP of quaternions involves first performing a linear interpolation between the two vectors, and then normalizing
    the interpolated result to have unit length.  That is:

    .. math::
        \mathbf{q}=\frac{\mathbf{q}_0(1-p)+\mathbf{q}_1p}
        {\left\|\mathbf{q}_0(1-p)+\mathbf{q}_1p\right\|}

    where :math:`p` is the fractional percent of the way between :math:`\mathbf{q}_0` and :math:`\mathbf{q}_1` that we
    want to interpolate at.  If the two quaternions are on opposite hemispheres :math:`\mathbf{q}_1` is negated first so
    the shorter path is taken.

    When using this function you can either specify the argument `time` as the fractional percent that you want to
    interpolate at, or specify the keyword arguments `time0` and `time1` to be the times corresponding to the first and
    second quaternion respectively and the function will compute the fractional percent for you.  All three of `time`,
    `time0`, and `time1` may also be datetime objects.

    .. warning::
        NLERP does not perform a constant angular velocity interpolation, therefore it is not well suited to
        interpolating over large angles. Use :func:`slerp` in that case.

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time corresponding to the first quaternion
    :param time1: the time corresponding to the second quaternion
    :return: The interpolated quaternion
    """

    dt = _fractional_time(time, time0, time1)

    q0 = _check_quaternion_array_and_shape(quaternion0, _dtype_of(quaternion0))
    q1 = _check_quaternion_array_and_shape(quaternion1, q0.dtype)

    if np.inner(q0, q1) < 0:
        q1 *= -1

    # perform the linear interpolation
    q = q0 * (1 - dt) + q1 * dt

    return quaternion_normalize(q)


def slerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1) -> FLOAT_ARRAY:
    r"""
    This function performs spherical linear interpolation of rotation quaternions.

    SLERP of quaternions involves performing a linear interpolation along the great circle arc connecting the two
    quaternions. That is:

    .. math::
        \omega = \text{cos}^{-1}(\mathbf{q}_0^T\mathbf{q}_1)\\
        \mathbf{q}=\mathbf{q}_0\text{cos}(p\omega)+
        \text{sin}(p\omega)\frac{\mathbf{q}_1-\mathbf{q}_0\text{cos}(\omega)}
        {\left\|\mathbf{q}_1-\mathbf{q}_0\text{cos}(\omega)\right\|}

    See :func:`nlerp` for the meaning of the time arguments.  When the quaternions are very close this falls back to
    :func:`nlerp`.

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The time to interpolate the quaternions at
    :param time0: the time corresponding to the first quaternion
    :param time1: the time corresponding to the second quaternion
    :return: The interpolated quaternion
    """

    dt = _fractional_time(time, time0, time1)

    # enforce unit normalization
    q0 = quaternion_normalize(quaternion0)
    q1 = quaternion_normalize(_check_quaternion_array_and_shape(quaternion1, q0.dtype))

    # get the cosine of the angle between the quaternions
    cos_angle = np.inner(q0, q1)

    if cos_angle < 0:
        # negate the second quaternion to ensure the shorter path is taken
        q1 *= -1
        cos_angle *= -1

    if cos_angle > 0.9995:
        # if the quaternions are really close revert to nlerp
        return nlerp(q0, q1, dt)

    angle0 = np.arccos(np.clip(cos_angle, -1, 1))  # angle between q0 and q1
    angle = angle0 * dt  # angle between q0 and q

    # form an orthonormal basis
    qb = q1 - q0 * cos_angle
    qb /= np.linalg.norm(qb)

    # perform the interpolation
    q = q0 * np.cos(angle) + qb * np.sin(angle)

    return quaternion_normalize(q)
