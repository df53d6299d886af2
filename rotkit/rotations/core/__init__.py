"""
This module contains fundamental mathematical operations and utilities for rotation
calculations. It has no dependencies on the rotation classes to avoid circular imports.
All functions here are pure mathematical operations on numpy arrays that are used as building
blocks for the rotation representations and the conversion engine.
"""

import rotkit.rotations.core.conversions
import rotkit.rotations.core.elementals
import rotkit.rotations.core.quaternion_math

from rotkit.rotations.core.conversions import (DEFAULT_AXIS,
                                               quaternion_to_rotmat, rotmat_to_quaternion,
                                               quaternion_to_angle_axis, angle_axis_to_quaternion,
                                               quaternion_to_rotvec, rotvec_to_quaternion,
                                               quaternion_to_euler, euler_to_quaternion, euler_to_rotmat,
                                               rotmat_to_euler, angle_axis_unique, rotvec_unique)

from rotkit.rotations.core.elementals import rot_x, rot_y, rot_z, skew

from rotkit.rotations.core.quaternion_math import (quaternion_normalize, quaternion_inverse,
                                                   quaternion_multiplication, compose_quaternions,
                                                   quaternion_unique, quaternion_rotate)

__all__ = ['DEFAULT_AXIS',
           'quaternion_to_rotmat', 'rotmat_to_quaternion',
           'quaternion_to_angle_axis', 'angle_axis_to_quaternion',
           'quaternion_to_rotvec', 'rotvec_to_quaternion',
           'quaternion_to_euler', 'euler_to_quaternion', 'euler_to_rotmat', 'rotmat_to_euler',
           'angle_axis_unique', 'rotvec_unique',
           'rot_x', 'rot_y', 'rot_z', 'skew',
           'quaternion_normalize', 'quaternion_inverse', 'quaternion_multiplication', 'compose_quaternions',
           'quaternion_unique', 'quaternion_rotate']
