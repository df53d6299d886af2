r"""
This package defines the rotation representations of rotkit, the conversions between them and the operators that
compose, invert and canonicalize them.

The representations and their format are:

.. _rotation-representation-table:

=================  =====================================================================================================
Representation     Description
=================  =====================================================================================================
quaternion         :class:`.RotationQuaternion`, a unit quaternion ordered scalar first
                   :math:`\mathbf{q}=\left[\begin{array}{cccc} w & x & y & z\end{array}\right]^T=
                   \left[\begin{array}{cc}\text{cos}(\frac{\theta}{2}) &
                   \text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}^T\end{array}\right]^T`.  :math:`\mathbf{q}` and
                   :math:`-\mathbf{q}` represent the same rotation.  This is the hub all conversions go through.
rotation matrix    :class:`.RotationMatrix`, a :math:`3\times 3` orthonormal matrix.  The PASSIVE matrix is the
                   transpose of the ACTIVE matrix of the same rotation.
angle-axis         :class:`.AngleAxis`, an angle :math:`\theta` and a unit axis :math:`\hat{\mathbf{x}}`.
rotation vector    :class:`.RotationVector`, the 3 element vector :math:`\mathbf{v}=\theta\hat{\mathbf{x}}`.
euler angles       :class:`.EulerAnglesZyx` (yaw, pitch, roll) and :class:`.EulerAnglesXyz`.
=================  =====================================================================================================

Every rotation carries a :class:`.Usage` (ACTIVE or PASSIVE) and a scalar type (float32 or float64), both fixed at
construction.  Rotations are immutable values.  They are composed with ``*`` (``a * b`` rotates by ``b`` first, then
by ``a``), inverted with :meth:`~.RotationOperators.inverted`, canonicalized with
:meth:`~.RotationOperators.get_unique`, and converted with :func:`.convert` or :meth:`~.RotationOperators.to`::

    >>> from rotkit.rotations import RotationQuaternion, RotationMatrix, AngleAxis, Usage
    >>> from numpy import pi
    >>> quarter_x = AngleAxis(pi/2, 1, 0, 0, usage=Usage.PASSIVE)
    >>> quarter_x.to(RotationMatrix).matrix
    array([[ 1.,  0.,  0.],
           [ 0.,  0.,  1.],
           [ 0., -1.,  0.]])

(up to round off).  In addition, the numpy routines the representations are built on are available from
:mod:`rotkit.rotations.core`.
"""

import rotkit.rotations.core

from rotkit.rotations.core import *
from rotkit.rotations.usage import Usage, check_scalar_type
from rotkit.rotations.exceptions import RotationError, InvalidRotationError, UsageMismatchError, PrecisionMismatchError
from rotkit.rotations.options import RotationOptions, get_rotation_options, set_rotation_options
from rotkit.rotations.rotation_base import RotationLike, RotationOperators
from rotkit.rotations.quaternion import RotationQuaternion
from rotkit.rotations.matrix import RotationMatrix, orthonormalize_matrix
from rotkit.rotations.angle_axis import AngleAxis
from rotkit.rotations.rotation_vector import RotationVector
from rotkit.rotations.euler import EulerAnglesZyx, EulerAnglesXyz
from rotkit.rotations.conversion import convert
from rotkit.rotations.interpolation import nlerp, slerp

__all__ = ['DEFAULT_AXIS',
           'quaternion_to_rotmat', 'rotmat_to_quaternion',
           'quaternion_to_angle_axis', 'angle_axis_to_quaternion',
           'quaternion_to_rotvec', 'rotvec_to_quaternion',
           'quaternion_to_euler', 'euler_to_quaternion', 'euler_to_rotmat', 'rotmat_to_euler',
           'angle_axis_unique', 'rotvec_unique',
           'rot_x', 'rot_y', 'rot_z', 'skew',
           'quaternion_normalize', 'quaternion_inverse', 'quaternion_multiplication', 'compose_quaternions',
           'quaternion_unique', 'quaternion_rotate',
           'Usage', 'check_scalar_type',
           'RotationError', 'InvalidRotationError', 'UsageMismatchError', 'PrecisionMismatchError',
           'RotationOptions', 'get_rotation_options', 'set_rotation_options',
           'RotationLike', 'RotationOperators',
           'RotationQuaternion', 'RotationMatrix', 'orthonormalize_matrix', 'AngleAxis', 'RotationVector',
           'EulerAnglesZyx', 'EulerAnglesXyz',
           'convert', 'nlerp', 'slerp']
